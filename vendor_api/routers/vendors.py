"""Vendor CRUD router.

Every endpoint resolves the principal first, then opens a store session,
then calls the service bound to that principal. Responses are the bare
record (or `{vendors, pagination}` for the list) in camelCase.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_api.core.pagination import PaginationParams
from vendor_api.core.security import get_principal
from vendor_api.db.base import get_db
from vendor_api.schemas.common import MessageResponse
from vendor_api.schemas.vendor import VendorCreate, VendorOut, VendorPage, VendorUpdate
from vendor_api.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


# ------------------------------------------------------------------
# Dependency: session gate, then store session, then service
# ------------------------------------------------------------------

def get_vendor_service(
    principal: str = Depends(get_principal),
    session: AsyncSession = Depends(get_db),
) -> VendorService:
    return VendorService(session, principal)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.get("", response_model=VendorPage)
async def list_vendors(
    pagination: PaginationParams = Depends(),
    svc: VendorService = Depends(get_vendor_service),
):
    """List the caller's vendors, newest first."""
    items, meta = await svc.list_page(pagination.page, pagination.limit)
    return VendorPage(
        vendors=[VendorOut.model_validate(v) for v in items],
        pagination=meta,
    )


@router.post("", response_model=VendorOut, status_code=status.HTTP_201_CREATED)
async def create_vendor(
    body: VendorCreate,
    svc: VendorService = Depends(get_vendor_service),
):
    """Create a vendor owned by the caller."""
    vendor = await svc.create(body)
    return VendorOut.model_validate(vendor)


@router.get("/{vendor_id}", response_model=VendorOut)
async def get_vendor(
    vendor_id: str,
    svc: VendorService = Depends(get_vendor_service),
):
    vendor = await svc.get_one(vendor_id)
    return VendorOut.model_validate(vendor)


@router.put("/{vendor_id}", response_model=VendorOut)
async def update_vendor(
    vendor_id: str,
    body: VendorUpdate,
    svc: VendorService = Depends(get_vendor_service),
):
    vendor = await svc.update(vendor_id, body)
    return VendorOut.model_validate(vendor)


@router.delete("/{vendor_id}", response_model=MessageResponse)
async def delete_vendor(
    vendor_id: str,
    svc: VendorService = Depends(get_vendor_service),
):
    await svc.delete(vendor_id)
    return MessageResponse(message="Vendor deleted successfully")
