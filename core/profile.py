"""
Profile reads/updates and password rotation for the authenticated user.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from auth.password import PasswordHasher
from core.errors import NotFoundError, UnauthorizedError, ValidationError
from database.store import UserStore

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store: UserStore, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    def get_profile(self, user_id: int) -> Dict[str, Optional[str]]:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        return user.public_profile()

    def update_profile(
        self,
        user_id: int,
        fullname: Optional[str],
        email: Optional[str],
        phone_number: Optional[str],
    ) -> Dict[str, Optional[str]]:
        """
        Overwrite fullname, email and phone number with the given values.

        Email uniqueness is only enforced at registration; an update may
        set an email another account already uses.
        """
        with self.store.transaction() as tx:
            user = tx.find(user_id)
            if user is None:
                raise NotFoundError()
            user.fullname = fullname
            user.email = email
            user.phone_number = phone_number
            tx.dirty = True

        logger.info("Updated profile for user %s", user_id)
        return {"fullname": fullname, "email": email, "phoneNumber": phone_number}

    def change_password(
        self,
        user_id: int,
        old_password: Optional[str],
        new_password: Optional[str],
    ) -> None:
        for name, value in (("oldPassword", old_password), ("newPassword", new_password)):
            if not value:
                raise ValidationError(
                    f"Both password fields are required: {name} is missing.", field=name,
                )

        with self.store.transaction() as tx:
            user = tx.find(user_id)
            if user is None:
                raise NotFoundError()
            if not self.hasher.verify(old_password, user.password_hash):
                raise UnauthorizedError("Old password does not match.")
            user.password_hash = self.hasher.hash(new_password)
            tx.dirty = True

        logger.info("Password changed for user %s", user_id)
