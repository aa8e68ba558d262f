"""
Pydantic model for the user records kept in ``users.json``.

Field aliases match the on-disk keys (``password``, ``phoneNumber``) so
files written by earlier versions of the service stay readable.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: int
    # profile updates overwrite these verbatim, missing values included
    fullname: Optional[str] = None
    email: Optional[str] = None
    password_hash: str = Field(alias="password", repr=False)
    phone_number: str = Field(default="", alias="phoneNumber")
    favorites: List[str] = Field(default_factory=list)

    @field_validator("fullname", "email", mode="before")
    @classmethod
    def _scalar_to_str(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("phone_number", mode="before")
    @classmethod
    def _none_phone_is_empty(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("favorites", mode="before")
    @classmethod
    def _dedupe_favorites(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        # set semantics, first occurrence wins
        return list(dict.fromkeys(str(item) for item in v if item is not None))

    def to_record(self) -> Dict[str, Any]:
        """Serialize with on-disk key names."""
        return self.model_dump(by_alias=True)

    def public_profile(self) -> Dict[str, Optional[str]]:
        return {
            "fullname": self.fullname,
            "email": self.email,
            "phoneNumber": self.phone_number or "",
        }

