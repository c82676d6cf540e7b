"""Vendor repository — owner-scoped access to the vendors table."""


from vendor_api.domain.vendor import Vendor
from vendor_api.repositories.base import OwnedRepository


class VendorRepository(OwnedRepository[Vendor]):
    model = Vendor
