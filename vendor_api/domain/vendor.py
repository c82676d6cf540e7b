"""SQLAlchemy ORM model for Vendors.

Every vendor belongs to exactly one principal (``user_email``, from
OwnedMixin). The owner is set at creation and never changes; all reads and
writes are scoped by it.
"""

from __future__ import annotations

import uuid
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from vendor_api.db.base import Base
from vendor_api.domain.mixins import OwnedMixin, TimestampMixin

# Fields that must be present and non-blank on every vendor
REQUIRED_FIELDS: tuple[str, ...] = (
    "vendor_name",
    "bank_account_no",
    "bank_name",
    "address_line2",
)


class Vendor(Base, OwnedMixin, TimestampMixin):
    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    vendor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    bank_account_no: Mapped[str] = mapped_column(String(64), nullable=False)
    bank_name: Mapped[str] = mapped_column(String(255), nullable=False)

    address_line1: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    # Mandatory even though address_line1 is not
    address_line2: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
