"""Core data structures for the tasks service."""

from typing import NamedTuple


class Task(NamedTuple):
    """A task, tagged with the user who created it."""

    text: str
    user_id: str

    def to_dict(self) -> dict:
        """Representation used over HTTP and on disk."""
        return {'text': self.text, 'userId': self.user_id}
