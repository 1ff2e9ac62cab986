"""
In-memory registry of issued bearer tokens.

Tokens are opaque random strings. The registry maps each token to the ID of
the user for whom it was issued; there is no expiry. The registry can be
seeded with fixed tokens (``STATIC_TOKENS``), which is how the demo frontend's
hard-coded ``Bearer abc`` gets accepted.
"""

import secrets
import threading
from typing import Dict, Optional

from flask import Flask, current_app

from kubdemo.base import logging

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'token_registry'


def parse_static_tokens(value: str) -> Dict[str, str]:
    """
    Parse ``token:uid`` pairs separated by commas.

    >>> parse_static_tokens('abc:u1, def:u2')
    {'abc': 'u1', 'def': 'u2'}

    """
    tokens = {}
    for pair in value.split(','):
        pair = pair.strip()
        if not pair:
            continue
        token, sep, uid = pair.partition(':')
        if not sep or not token.strip() or not uid.strip():
            raise ValueError(f'Malformed static token entry: {pair!r}')
        tokens[token.strip()] = uid.strip()
    return tokens


class TokenRegistry(object):
    """Thread-safe mapping of tokens to user IDs."""

    def __init__(self, static_tokens: Optional[Dict[str, str]] = None) -> None:
        self._tokens: Dict[str, str] = dict(static_tokens or {})
        self._lock = threading.Lock()

    def issue(self, user_id: str) -> str:
        """Create a new token for ``user_id``."""
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._tokens[token] = user_id
        logger.debug('Issued token for user %s', user_id)
        return token

    def lookup(self, token: str) -> Optional[str]:
        """Get the user ID for ``token``, or ``None`` if it is unknown."""
        with self._lock:
            return self._tokens.get(token)


def init_app(app: Flask) -> None:
    """Set configuration defaults and attach a registry to the application."""
    app.config.setdefault('STATIC_TOKENS', 'abc:u1')
    static = parse_static_tokens(app.config['STATIC_TOKENS'] or '')
    app.extensions[EXTENSION_KEY] = TokenRegistry(static)


def current_registry(app: Optional[Flask] = None) -> TokenRegistry:
    """Get the :class:`.TokenRegistry` attached to the (current) app."""
    app = app or current_app
    return app.extensions[EXTENSION_KEY]   # type: ignore
