"""
FastAPI dependencies for authentication.

Provides ``get_current_user``, the gate used by every protected route.
It only establishes identity; each service filters records by the
verified user id.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header

from api.dependencies import get_services
from auth.jwt import SessionClaim
from core.errors import ForbiddenError, UnauthenticatedError
from core.service_factory import Services


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    # second space-separated word, whatever the scheme
    parts = (authorization or "").split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    services: Services = Depends(get_services),
) -> SessionClaim:
    """
    Extract and verify the token from ``Authorization: Bearer <token>``,
    returning the verified claim.

    No token presented → 401.  A token that fails verification
    (malformed, bad signature, expired, or sent under another scheme)
    → 403.
    """
    token = _extract_token(authorization)
    if token is None:
        raise UnauthenticatedError()

    claim = services.tokens.verify(token)
    if claim is None:
        raise ForbiddenError()
    return claim
