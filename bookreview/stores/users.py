"""
User Directory

Registered credentials, kept in memory. Users are created by registration
only; they are never updated or deleted.

Passwords are stored exactly as given. Registration checks for a duplicate
and inserts under one lock, so two concurrent sign-ups with the same name
cannot both succeed.
"""

import logging
import threading
from dataclasses import dataclass

from bookreview.exceptions import DuplicateError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    username: str
    password: str


class UserDirectory:
    """Unordered collection of users; usernames are unique."""

    def __init__(self) -> None:
        self._users: list[User] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def exists(self, username: str) -> bool:
        """True if a user with exactly this name is registered."""
        with self._lock:
            return self._find(username) is not None

    def verify(self, username: str, password: str) -> bool:
        """True if the username/password pair matches a registered user."""
        with self._lock:
            user = self._find(username)
        return user is not None and user.password == password

    def register(self, username: str, password: str) -> User:
        """
        Add a new user.

        Raises:
            DuplicateError: If the username is already taken
        """
        with self._lock:
            if self._find(username) is not None:
                raise DuplicateError(
                    "Username already exists. Please choose a different username."
                )
            user = User(username=username, password=password)
            self._users.append(user)
        logger.info(f"Registered user {username}")
        return user

    def _find(self, username: str) -> User | None:
        for user in self._users:
            if user.username == username:
                return user
        return None
