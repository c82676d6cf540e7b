"""Vendor Pydantic schemas (request DTOs and response models).

Request bodies accept every field as optional; required-field checks happen
in the service so that all missing fields are reported together.
"""


from datetime import datetime

from pydantic import Field

from vendor_api.core.pagination import PageMeta
from vendor_api.schemas.common import CamelModel

class VendorFields(CamelModel):
    vendor_name: str | None = None
    bank_account_no: str | None = None
    bank_name: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    country: str | None = None
    zip_code: str | None = None

class VendorCreate(VendorFields):
    pass

class VendorUpdate(VendorFields):
    pass

class VendorOut(CamelModel):
    id: str = Field(alias="_id")
    vendor_name: str
    bank_account_no: str
    bank_name: str
    address_line1: str | None = None
    address_line2: str
    city: str | None = None
    country: str | None = None
    zip_code: str | None = None
    user_email: str
    created_at: datetime
    updated_at: datetime

class VendorPage(CamelModel):
    """`{ vendors: [...], pagination: {...} }`"""

    vendors: list[VendorOut]
    pagination: PageMeta
