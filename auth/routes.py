"""
Auth API routes — register, login.

Mounted at the application root (``/register``, ``/login``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.dependencies import get_services
from core.service_factory import Services

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Request schemas ────────────────────────────────────────────────────
# Fields are optional here so a missing field reaches the service and is
# reported as a validation error with the service's own message.


class RegisterRequest(BaseModel):
    fullname: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """Register a new user.  Does not log the user in."""
    services.accounts.register(req.fullname, req.email, req.password)
    return {"message": "Registration successful!"}


@router.post("/login")
def login(
    req: LoginRequest,
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    """Login with email + password."""
    result = services.accounts.login(req.email, req.password)
    return {"message": "Login successful!", **result}
