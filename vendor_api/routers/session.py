"""Current session lookup for signed-in clients."""

from fastapi import APIRouter, Depends

from vendor_api.core.security import get_principal
from vendor_api.schemas.common import SessionOut

router = APIRouter(tags=["Session"])


@router.get("/session", response_model=SessionOut)
async def read_session(principal: str = Depends(get_principal)):
    return SessionOut(email=principal)
