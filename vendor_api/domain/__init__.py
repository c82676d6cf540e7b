"""Domain package — all ORM models are imported here so table bootstrap sees them.

  vendor.py  — Vendor records, owned by a single principal
  mixins.py  — Shared TimestampMixin, OwnedMixin
"""

from vendor_api.domain.vendor import REQUIRED_FIELDS, Vendor

__all__ = ["REQUIRED_FIELDS", "Vendor"]
