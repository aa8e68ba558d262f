"""
Centralised service builder.

``create_app`` and the tests call ``build_services`` with an explicit
``Settings`` so every component gets its secret, paths and work factor
from one place instead of reading global state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from auth.jwt import TokenService
from auth.password import PasswordHasher
from config.settings import Settings
from core.accounts import AccountService
from core.favorites import FavoritesService
from core.profile import ProfileService
from database.store import StoryCatalog, UserStore

logger = logging.getLogger(__name__)


@dataclass
class Services:
    settings: Settings
    users: UserStore
    catalog: StoryCatalog
    tokens: TokenService
    accounts: AccountService
    profiles: ProfileService
    favorites: FavoritesService


def build_services(settings: Settings) -> Services:
    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; signing tokens with the built-in default secret")

    users = UserStore(settings.users_db_path)
    catalog = StoryCatalog(settings.stories_db_path)
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    tokens = TokenService(settings.jwt_secret, expiry_seconds=settings.jwt_expiry_seconds)

    return Services(
        settings=settings,
        users=users,
        catalog=catalog,
        tokens=tokens,
        accounts=AccountService(users, hasher, tokens),
        profiles=ProfileService(users, hasher),
        favorites=FavoritesService(users, catalog),
    )
