"""Session gate: resolve the signed-in principal from a request.

Session tokens are JWTs issued by the identity provider and signed with
``SESSION_SECRET``. They are accepted from ``Authorization: Bearer <token>``
or from the session cookie. The principal is the token's ``email`` claim.
"""

import logging

from fastapi import Request
from jose import JWTError, jwt

from vendor_api.core.config import Settings
from vendor_api.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def _extract_token(request: Request, cookie_name: str) -> str | None:
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(cookie_name) or None


def resolve_principal(request: Request, settings: Settings) -> str | None:
    """Return the caller's email, or ``None`` when there is no valid session."""
    token = _extract_token(request, settings.session_cookie_name)
    if not token:
        return None
    if not settings.session_secret:
        logger.warning("Session token presented but SESSION_SECRET is not configured")
        return None

    try:
        claims = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
            options={"verify_aud": False},
        )
    except JWTError as exc:
        logger.debug("Rejected session token: %s", exc)
        return None

    email = claims.get("email")
    if not isinstance(email, str) or not email.strip():
        logger.debug("Session token has no email claim")
        return None
    return email.strip()


async def get_principal(request: Request) -> str:
    """FastAPI dependency: the current principal, or 401."""
    principal = resolve_principal(request, request.app.state.settings)
    if principal is None:
        raise UnauthorizedError()
    return principal
