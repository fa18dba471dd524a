"""In-memory record store for the user directory."""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Union

from .models import User, UserFields

logger = logging.getLogger("userdir.storage")

UserId = Union[int, str]


def normalise_user_id(value: object) -> Optional[int]:
    """Convert a path or form supplied identifier into the integer key."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            return int(cleaned)
        except ValueError:
            return None
    return None


class UserStore:
    """Keep user records in process memory and assign monotonically increasing ids.

    Records are immutable :class:`~userdir.models.User` instances, so callers can
    never modify stored state through a reference returned by :meth:`get` or
    :meth:`list`. Identifiers are never reused, even after a record is deleted.
    """

    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def add(self, fields: UserFields) -> int:
        with self._lock:
            user_id = self._next_id
            self._users[user_id] = User.from_fields(user_id, fields)
            self._next_id += 1
        logger.info("Added user %s", user_id)
        return user_id

    def list(self) -> List[User]:
        with self._lock:
            return list(self._users.values())

    def get(self, user_id: UserId) -> Optional[User]:
        key = normalise_user_id(user_id)
        if key is None:
            return None
        with self._lock:
            return self._users.get(key)

    def update(self, user_id: UserId, fields: UserFields) -> bool:
        """Replace the record stored under ``user_id``.

        Unknown identifiers are left untouched and ``False`` is returned.
        """

        key = normalise_user_id(user_id)
        if key is None:
            return False
        with self._lock:
            if key not in self._users:
                return False
            self._users[key] = User.from_fields(key, fields)
        logger.info("Updated user %s", key)
        return True

    def delete(self, user_id: UserId) -> bool:
        key = normalise_user_id(user_id)
        if key is None:
            return False
        with self._lock:
            removed = self._users.pop(key, None)
        if removed is None:
            return False
        logger.info("Deleted user %s", key)
        return True

    def search(self, term: str) -> List[User]:
        """Return users whose first or last name contains ``term``, ignoring case."""

        needle = term.strip().lower()
        return [
            user
            for user in self.list()
            if needle in user.first_name.lower() or needle in user.last_name.lower()
        ]


__all__ = ["UserStore", "UserId", "normalise_user_id"]
