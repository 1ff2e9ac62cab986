"""Core data structures for the edge router."""

from typing import NamedTuple, Optional, Pattern


class Route(NamedTuple):
    """A path rule: where matching requests go, and how the path changes."""

    name: str
    pattern: Pattern
    target: str
    """Base URL of the backend, without a trailing slash."""
    rewrite: str
    """Template for the forwarded path, e.g. ``/\\2``."""

    def apply(self, path: str) -> Optional[str]:
        """Rewrite ``path`` if this route matches it, else ``None``."""
        match = self.pattern.match(path)
        if match is None:
            return None
        rewritten = match.expand(self.rewrite)
        if not rewritten.startswith('/'):
            rewritten = f'/{rewritten}'
        return rewritten


class NoRouteMatched(LookupError):
    """No rule matches the requested path."""
