"""
Registry of accounts created during a test session, deleted at teardown.

The registry is an ordinary object: whoever owns the session creates it
and drains it. The deletion call itself is supplied by the caller.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Deleter = Callable[[str, str], Any]


@dataclass(frozen=True)
class TrackedUser:
    category: str
    email: str
    password: str


class CleanupRegistry:
    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[str, List[TrackedUser]] = {}

    def track_user(self, category: str, email: str, password: str) -> TrackedUser:
        """
        Remember a created account for later deletion.

        Args:
            category: Grouping key, e.g. "cart" or "checkout"
            email: Account email
            password: Account password
        """
        user = TrackedUser(category, email, password)
        with self._lock:
            self._users.setdefault(category, []).append(user)
        return user

    def tracked(self, category: Optional[str] = None) -> List[TrackedUser]:
        with self._lock:
            if category is not None:
                return list(self._users.get(category, []))
            return [user for users in self._users.values() for user in users]

    def categories(self) -> List[str]:
        with self._lock:
            return list(self._users)

    def drain(self, category: str, deleter: Deleter) -> List[TrackedUser]:
        """
        Delete every account in a category and forget the category.

        A failing deletion is logged and does not stop the others.

        Args:
            category: Category to drain
            deleter: Called as deleter(email, password)

        Returns:
            list: the users whose deletion raised
        """
        with self._lock:
            users = self._users.pop(category, [])

        failed = []
        for user in users:
            try:
                deleter(user.email, user.password)
            except Exception as exc:
                logger.warning("Failed to delete user %s: %s", user.email, exc)
                failed.append(user)
            else:
                logger.info("Deleted user %s", user.email)
        return failed

    def drain_all(self, deleter: Deleter) -> List[TrackedUser]:
        failed = []
        for category in self.categories():
            failed.extend(self.drain(category, deleter))
        return failed

    def clear(self) -> None:
        """Forget every tracked account without deleting anything."""
        with self._lock:
            self._users.clear()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(users) for users in self._users.values())
