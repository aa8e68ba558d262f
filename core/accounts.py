"""
Registration and login.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from auth.jwt import TokenService
from auth.password import PasswordHasher
from core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from database.models import User
from database.store import UserStore

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class AccountService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(
        self,
        fullname: Optional[str],
        email: Optional[str],
        password: Optional[str],
    ) -> User:
        """Create a user with an empty phone number and no favorites.

        Emails are compared exactly as stored; ``A@x.com`` and ``a@x.com``
        are different accounts.
        """
        for name, value in (("fullname", fullname), ("email", email), ("password", password)):
            if not value:
                raise ValidationError(f"All fields are required: {name} is missing.", field=name)

        password_hash = self.hasher.hash(password)
        with self.store.transaction() as tx:
            if any(u.email == email for u in tx.users):
                raise ConflictError()

            user_id = _now_ms()
            taken = {u.id for u in tx.users}
            taken.update(r.get("id") for r in tx.unparsed if isinstance(r, dict))
            while user_id in taken:
                user_id += 1

            user = User(
                id=user_id,
                fullname=fullname,
                email=email,
                password_hash=password_hash,
                phone_number="",
                favorites=[],
            )
            tx.users.append(user)
            tx.dirty = True

        logger.info("Registered user %s", user.id)
        return user

    def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """Check credentials and issue a session token."""
        user = self.store.find_by_email(email or "")
        if user is None:
            raise NotFoundError("Email not found.")
        if not self.hasher.verify(password or "", user.password_hash):
            logger.info("Login rejected for user %s: wrong password", user.id)
            raise UnauthorizedError("Wrong password.")

        token = self.tokens.issue(user.id, user.fullname)
        logger.info("Login: user %s", user.id)
        return {"token": token, "user": {"fullname": user.fullname}}
