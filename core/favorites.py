"""
Per-user favorite stories.

A user's favorites are a set of story ids stored on the user record.
Ids are matched as exact strings and are not checked against the
catalog when added; ids with no catalog entry simply drop out of
``list``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from core.errors import NotFoundError
from database.store import StoryCatalog, UserStore

logger = logging.getLogger(__name__)


class FavoritesService:
    def __init__(self, store: UserStore, catalog: StoryCatalog):
        self.store = store
        self.catalog = catalog

    def status(self, user_id: int, story_id: str) -> bool:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        return story_id in user.favorites

    def add(self, user_id: int, story_id: str) -> None:
        """Idempotent insert; the file is rewritten only if the set changed."""
        with self.store.transaction() as tx:
            user = tx.find(user_id)
            if user is None:
                raise NotFoundError()
            if story_id not in user.favorites:
                user.favorites = user.favorites + [story_id]
                tx.dirty = True

        logger.debug("User %s favorited %r (changed=%s)", user_id, story_id, tx.dirty)

    def remove(self, user_id: int, story_id: str) -> None:
        """Idempotent removal; always rewrites the file."""
        with self.store.transaction() as tx:
            user = tx.find(user_id)
            if user is None:
                raise NotFoundError()
            user.favorites = [fid for fid in user.favorites if fid != story_id]
            tx.dirty = True

        logger.debug("User %s unfavorited %r", user_id, story_id)

    def list(self, user_id: int) -> List[Dict[str, Any]]:
        """Catalog entries whose id is in the user's favorites, in catalog order."""
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError()
        wanted = set(user.favorites)
        return [story for story in self.catalog.all() if story.get("id") in wanted]
