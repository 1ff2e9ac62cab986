"""Core data structures for the users service."""

from typing import NamedTuple


class User(NamedTuple):
    """A registered user."""

    user_id: str
    email: str
    hashed_password: str
