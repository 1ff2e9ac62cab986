"""In-memory directory of registered users."""

import threading
import uuid
from typing import Dict, Optional

from flask import Flask, current_app

from kubdemo.base.exceptions import Conflict
from kubdemo.users.domain import User

EXTENSION_KEY = 'user_directory'


class UserDirectory(object):
    """Thread-safe mapping of email addresses to users."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(email: str) -> str:
        return email.strip().lower()

    def add(self, email: str, hashed_password: str) -> User:
        """
        Register a new user.

        Raises
        ------
        :class:`.Conflict`
            If a user with the same email address already exists.

        """
        key = self._key(email)
        with self._lock:
            if key in self._users:
                raise Conflict(f'User {email} already exists')
            user = User(user_id=str(uuid.uuid4()), email=email.strip(),
                        hashed_password=hashed_password)
            self._users[key] = user
        return user

    def get(self, email: str) -> Optional[User]:
        """Get the user registered with ``email``, if any."""
        with self._lock:
            return self._users.get(self._key(email))


def init_app(app: Flask) -> None:
    """Attach a directory to the application."""
    app.extensions[EXTENSION_KEY] = UserDirectory()


def current_directory(app: Optional[Flask] = None) -> UserDirectory:
    """Get the :class:`.UserDirectory` attached to the (current) app."""
    app = app or current_app
    return app.extensions[EXTENSION_KEY]   # type: ignore
