"""
Error hierarchy for the story service.

Every error carries a machine-readable ``code`` and the HTTP status the
global handler answers with.  Messages are user-facing and never contain
password material.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class StoryServiceError(Exception):
    """Base exception for all domain failures."""

    def __init__(self, message: str, code: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message, "code": self.code}


# ── 400-level ───────────────────────────────────────────────────────────


class ValidationError(StoryServiceError):
    """Missing or malformed input."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR", 400)
        self.field = field

    def to_response(self) -> Dict[str, Any]:
        body = super().to_response()
        if self.field:
            body["field"] = self.field
        return body


class ConflictError(StoryServiceError):
    """Email already registered.  Answered with 400 like the rest of the
    registration checks."""

    def __init__(self, message: str = "Email is already registered."):
        super().__init__(message, "EMAIL_EXISTS", 400)


class UnauthenticatedError(StoryServiceError):
    """No credential was presented."""

    def __init__(self, message: str = "Authentication token is missing."):
        super().__init__(message, "UNAUTHENTICATED", 401)


class ForbiddenError(StoryServiceError):
    """A credential was presented but is invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token."):
        super().__init__(message, "FORBIDDEN", 403)


class UnauthorizedError(StoryServiceError):
    """Credential has the right shape but the secret is wrong (bad password)."""

    def __init__(self, message: str = "Wrong password."):
        super().__init__(message, "UNAUTHORIZED", 401)


class NotFoundError(StoryServiceError):
    """Referenced entity does not exist."""

    def __init__(self, message: str = "User not found."):
        super().__init__(message, "NOT_FOUND", 404)
