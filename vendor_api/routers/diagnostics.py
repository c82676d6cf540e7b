"""Store diagnostics — reports whether the store connection can be established."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from vendor_api.core.exceptions import StoreError
from vendor_api.db.base import StoreConnection, get_store
from vendor_api.schemas.common import StoreStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/diagnostics", tags=["Diagnostics"])


@router.get("/store", response_model=StoreStatus)
async def store_status(store: StoreConnection = Depends(get_store)):
    try:
        await store.ensure_connection()
    except StoreError as exc:
        logger.warning("Store diagnostics failed: %s", exc.details)
        return JSONResponse(
            status_code=500,
            content={"error": exc.message, "details": exc.details},
        )
    return StoreStatus(status="Store connected successfully")
