"""
Integration with the auth service, for verifying bearer tokens.

The auth service exposes ``GET /verify-token/<token>``, which responds with
``{"uid": "..."}`` if the token is valid and with a non-2xx status if it is
not. Nothing about the structure of the token is known here.
"""

import json
from typing import Any, Optional
from urllib.parse import quote

import requests
from flask import Flask

from kubdemo.base import logging, status
from kubdemo.base.addresses import service_url
from kubdemo.base.context import get_application_config, \
    get_application_global
from kubdemo.base.exceptions import Unauthenticated, UpstreamUnavailable

logger = logging.getLogger(__name__)


class AuthVerifierSession(object):
    """Verifies tokens against the auth service, for one request context."""

    def __init__(self, endpoint: str, timeout: float) -> None:
        """Create a new HTTP session; no retries."""
        self.endpoint = service_url(endpoint)
        self.timeout = timeout
        self._session = requests.Session()
        self._adapter = requests.adapters.HTTPAdapter(max_retries=0)
        self._session.mount('http://', self._adapter)
        self._session.mount('https://', self._adapter)
        logger.debug('New AuthVerifierSession with endpoint = %s',
                     self.endpoint)

    def verify(self, token: str) -> str:
        """
        Verify a bearer token.

        Parameters
        ----------
        token : str
            The opaque token passed by the client.

        Returns
        -------
        str
            The ID of the user to whom the token belongs.

        Raises
        ------
        :class:`.Unauthenticated`
            If the auth service rejects the token.
        :class:`.UpstreamUnavailable`
            If the auth service cannot be reached, or its response makes no
            sense.

        """
        url = f'{self.endpoint}/verify-token/{quote(token, safe="")}'
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error('Auth service unreachable: %s', e)
            raise UpstreamUnavailable(f'Auth service unreachable: {e}') from e

        if not status.is_success(response.status_code):
            logger.debug('Auth service rejected token with status %i',
                         response.status_code)
            raise Unauthenticated('Token rejected')

        try:
            data: Any = response.json()
        except (json.decoder.JSONDecodeError, ValueError) as e:
            logger.error('Auth service response could not be decoded')
            raise UpstreamUnavailable('Could not read auth response') from e
        uid = data.get('uid') if isinstance(data, dict) else None
        if not isinstance(uid, str) or not uid:
            logger.error('Auth service response has no uid')
            raise UpstreamUnavailable('Auth response has no uid')
        return uid


def init_app(app: Flask) -> None:
    """Set required configuration defaults for the application."""
    app.config.setdefault('AUTH_ADDRESS', 'localhost:8000')
    app.config.setdefault('AUTH_TIMEOUT', '5')


def get_session(app: Optional[Flask] = None) -> AuthVerifierSession:
    """Create a new :class:`.AuthVerifierSession` from config."""
    config = get_application_config(app)
    endpoint = config.get('AUTH_ADDRESS', 'localhost:8000')
    timeout = float(config.get('AUTH_TIMEOUT', '5'))
    return AuthVerifierSession(endpoint, timeout)


def current_session(app: Optional[Flask] = None) -> AuthVerifierSession:
    """Get the verifier session for this context (if there is one)."""
    g = get_application_global()
    if g:
        if 'verifier' not in g:
            g.verifier = get_session(app)    # type: ignore
        return g.verifier   # type: ignore
    return get_session(app)
