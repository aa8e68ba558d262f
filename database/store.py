"""
Flat JSON file stores for users and stories.

Both files hold a single JSON array and are always read and written as
complete snapshots.  A file that is missing or not a JSON array
degrades to an empty collection (logged, never raised).  A single user
record that fails validation is skipped on read and written back
untouched; a failed write propagates.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pydantic import ValidationError as PydanticValidationError

from database.models import User

logger = logging.getLogger(__name__)


def _read_json_array(path: Path) -> List[Any]:
    if not path.exists():
        return []
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        logger.error("Failed to read %s: %s", path, exc)
        return []
    if not isinstance(data, list):
        logger.error("Failed to read %s: expected a JSON array", path)
        return []
    return data


class UserTransaction:
    """Users loaded under the store lock.  Set ``dirty`` to persist on exit."""

    def __init__(self, users: List[User], unparsed: Optional[List[Any]] = None):
        self.users = users
        self.unparsed = unparsed or []
        self.dirty = False

    def find(self, user_id: int) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None


class UserStore:
    """Whole-file credential store backed by ``users.json``."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load_records(self) -> Tuple[List[User], List[Any]]:
        users: List[User] = []
        unparsed: List[Any] = []
        for item in _read_json_array(self.path):
            try:
                users.append(User.model_validate(item))
            except PydanticValidationError as exc:
                logger.error(
                    "Skipping invalid user record in %s (kept as-is): %s", self.path, exc,
                )
                unparsed.append(item)
        return users, unparsed

    def load(self) -> List[User]:
        return self._load_records()[0]

    def save(self, users: List[User], unparsed: Sequence[Any] = ()) -> None:
        """Replace the whole file with *users*.

        *unparsed* holds records that failed validation on load; they are
        written back verbatim after the users.
        """
        payload = [u.to_record() for u in users] + list(unparsed)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug("Wrote %d users to %s", len(users), self.path)

    def find_by_id(self, user_id: int) -> Optional[User]:
        for user in self.load():
            if user.id == user_id:
                return user
        return None

    def find_by_email(self, email: str) -> Optional[User]:
        # exact, case-sensitive match
        for user in self.load():
            if user.email == email:
                return user
        return None

    @contextmanager
    def transaction(self) -> Iterator[UserTransaction]:
        """
        Load every user under the store lock and write the collection back
        on a clean exit if the caller marked it dirty.

        The lock serializes load-mutate-save sequences within this process
        only; another process writing the same file still wins last.
        """
        with self._lock:
            tx = UserTransaction(*self._load_records())
            yield tx
            if tx.dirty:
                self.save(tx.users, tx.unparsed)


class StoryCatalog:
    """Read-only story lookup backed by ``stories.json``."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def all(self) -> List[Dict[str, Any]]:
        return [s for s in _read_json_array(self.path) if isinstance(s, dict)]

    def get(self, story_id: str) -> Optional[Dict[str, Any]]:
        for story in self.all():
            if story.get("id") == story_id:
                return story
        return None
