"""
REST API routes for stories, profile, password and favorites.

Route prefix: /api
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_services
from auth.dependencies import get_current_user
from auth.jwt import SessionClaim
from core.errors import NotFoundError
from core.service_factory import Services

logger = logging.getLogger(__name__)

router = APIRouter()


class ProfileUpdateRequest(BaseModel):
    fullname: Optional[str] = None
    email: Optional[str] = None
    phoneNumber: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    oldPassword: Optional[str] = None
    newPassword: Optional[str] = None


# ── Stories ────────────────────────────────────────────────────────────


@router.get("/stories/{story_id}", tags=["stories"])
def get_story(
    story_id: str,
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    story = services.catalog.get(story_id)
    if story is None:
        raise NotFoundError("Story not found.")
    return story


# ── Profile ────────────────────────────────────────────────────────────


@router.get("/profile", tags=["profile"])
def get_profile(
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    return services.profiles.get_profile(user.id)


@router.put("/profile", tags=["profile"])
def update_profile(
    req: ProfileUpdateRequest,
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    updated = services.profiles.update_profile(
        user.id, req.fullname, req.email, req.phoneNumber,
    )
    return {"message": "Profile updated successfully!", "user": updated}


@router.put("/password", tags=["profile"])
def change_password(
    req: PasswordChangeRequest,
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, Any]:
    services.profiles.change_password(user.id, req.oldPassword, req.newPassword)
    return {"message": "Password changed successfully."}


# ── Favorites ──────────────────────────────────────────────────────────


@router.get("/favorites/status/{story_id}", tags=["favorites"])
def favorite_status(
    story_id: str,
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, bool]:
    return {"isFavorited": services.favorites.status(user.id, story_id)}


@router.post("/favorites/{story_id}", tags=["favorites"])
def add_favorite(
    story_id: str,
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, str]:
    services.favorites.add(user.id, story_id)
    return {"message": "Added to favorites."}


@router.delete("/favorites/{story_id}", tags=["favorites"])
def remove_favorite(
    story_id: str,
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, str]:
    services.favorites.remove(user.id, story_id)
    return {"message": "Removed from favorites."}


@router.get("/favorites", tags=["favorites"])
def list_favorites(
    user: SessionClaim = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[Dict[str, Any]]:
    return services.favorites.list(user.id)
