"""
Authentication & Authorization Gates

Two stacked request gates, used as FastAPI dependencies:

    require_auth   - a valid session cookie must be present
    require_admin  - runs require_auth first, then checks the stored role

Admin routes attach the ordered gate list ``ADMIN_ONLY`` through
``dependencies=``. A failing gate raises before the handler runs.
"""

import logging
from typing import Optional

from fastapi import Cookie, Depends, Request

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.security import TokenClaims, verify_token
from app.models import Role
from app.services.store import BaseDocumentStore, get_document_store

logger = logging.getLogger(__name__)

COOKIE_NAME = get_settings().cookie_name


async def require_auth(
    request: Request,
    token: Optional[str] = Cookie(None, alias=COOKIE_NAME),
) -> TokenClaims:
    """
    Verify the session cookie and expose its claims on ``request.state.user``.

    Raises:
        UnauthorizedError: Cookie missing, or token malformed/expired/forged
    """
    if not token:
        logger.warning(f"{request.method} {request.url.path}: no session token")
        raise UnauthorizedError()

    result = verify_token(token)
    if not result.is_valid:
        logger.warning(f"{request.method} {request.url.path}: {result.error_message}")
        raise UnauthorizedError()

    request.state.user = result.claims
    return result.claims


async def require_admin(
    claims: TokenClaims = Depends(require_auth),
    store: BaseDocumentStore = Depends(get_document_store),
) -> TokenClaims:
    """
    Allow the request only when the caller's stored role is admin.

    Raises:
        ForbiddenError: No user with the claimed email, or role is not admin
    """
    user = await store.find_one(get_settings().user_collection, {"email": claims.email})
    if user is None or user.get("role") != Role.ADMIN.value:
        logger.warning(f"Admin access refused for {claims.email}")
        raise ForbiddenError()
    return claims


ADMIN_ONLY = [Depends(require_admin)]
