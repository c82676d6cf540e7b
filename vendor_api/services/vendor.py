"""Vendor service — owner-scoped vendor operations.

The service is bound to one principal at construction and every repository
call it makes is scoped to that principal. Records owned by someone else are
reported exactly like records that do not exist.

Writes are committed before the service returns, so a failed commit
surfaces as an error instead of a success response.

Rule: No FastAPI here. Store failures propagate to the caller untouched.
"""

import logging
from typing import Any

from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_api.core.exceptions import NotFoundError, ValidationError
from vendor_api.core.pagination import MAX_OFFSET, PageMeta
from vendor_api.domain.vendor import REQUIRED_FIELDS, Vendor
from vendor_api.repositories.vendor import VendorRepository
from vendor_api.schemas.vendor import VendorCreate, VendorUpdate

logger = logging.getLogger(__name__)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required(fields: dict[str, Any], *, partial: bool = False) -> list[str]:
    """Return the required fields that are missing or blank in ``fields``.

    With ``partial`` only the keys actually present are checked, so an
    update may omit required fields but may not blank them out.
    """
    missing = []
    for name in REQUIRED_FIELDS:
        if partial and name not in fields:
            continue
        if _blank(fields.get(name)):
            missing.append(name)
    return missing


class VendorService:
    def __init__(self, session: AsyncSession, principal: str):
        self._principal = principal
        self._repo = VendorRepository(session, principal)

    async def list_page(self, page: int, limit: int) -> tuple[list[Vendor], PageMeta]:
        skip = (page - 1) * limit
        items: list[Vendor] = []
        if skip <= MAX_OFFSET:
            items = await self._repo.find(skip=skip, limit=limit, order_by="created_at")
        total = await self._repo.count()
        return items, PageMeta.build(page, limit, total)

    async def get_one(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.find_one(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor")
        return vendor

    async def create(self, data: VendorCreate) -> Vendor:
        fields = data.model_dump()
        missing = missing_required(fields)
        if missing:
            raise ValidationError([to_camel(name) for name in missing])

        vendor = await self._repo.insert(**fields)
        await self._repo.commit()
        logger.info("Created vendor %s for %s", vendor.id, self._principal)
        return vendor

    async def update(self, vendor_id: str, data: VendorUpdate) -> Vendor:
        fields = data.model_dump(exclude_unset=True)
        missing = missing_required(fields, partial=True)
        if missing:
            raise ValidationError([to_camel(name) for name in missing])

        vendor = await self._repo.update(vendor_id, **fields)
        if vendor is None:
            raise NotFoundError("Vendor")
        await self._repo.commit()
        logger.info("Updated vendor %s (%s)", vendor_id, ", ".join(sorted(fields)) or "no fields")
        return vendor

    async def delete(self, vendor_id: str) -> None:
        deleted = await self._repo.delete(vendor_id)
        if not deleted:
            raise NotFoundError("Vendor")
        await self._repo.commit()
        logger.info("Deleted vendor %s", vendor_id)
