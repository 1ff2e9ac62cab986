"""Integration with the auth service, for hashing passwords and getting tokens."""

import json
from typing import Any, Optional

import requests
from flask import Flask

from kubdemo.base import logging, status
from kubdemo.base.addresses import service_url
from kubdemo.base.context import get_application_config, \
    get_application_global
from kubdemo.base.exceptions import Unauthenticated, UpstreamUnavailable

logger = logging.getLogger(__name__)


class AuthServiceSession(object):
    """Talks to the auth service within one request context."""

    def __init__(self, endpoint: str, timeout: float) -> None:
        """Create a new HTTP session; no retries."""
        self.endpoint = service_url(endpoint)
        self.timeout = timeout
        self._session = requests.Session()
        self._adapter = requests.adapters.HTTPAdapter(max_retries=0)
        self._session.mount('http://', self._adapter)
        self._session.mount('https://', self._adapter)

    def _post(self, path: str, payload: dict) -> requests.Response:
        try:
            return self._session.post(f'{self.endpoint}{path}', json=payload,
                                      timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error('Auth service unreachable: %s', e)
            raise UpstreamUnavailable(f'Auth service unreachable: {e}') from e

    def _read(self, response: requests.Response, key: str) -> str:
        try:
            data: Any = response.json()
        except (json.decoder.JSONDecodeError, ValueError) as e:
            raise UpstreamUnavailable('Could not read auth response') from e
        value = data.get(key) if isinstance(data, dict) else None
        if not isinstance(value, str) or not value:
            raise UpstreamUnavailable(f'Auth response has no {key}')
        return value

    def hash_password(self, password: str) -> str:
        """
        Get a hash of ``password`` that can be stored.

        Raises
        ------
        :class:`.UpstreamUnavailable`

        """
        response = self._post('/hashed-password', {'password': password})
        if not status.is_success(response.status_code):
            logger.error('Hashing failed with status %i',
                         response.status_code)
            raise UpstreamUnavailable('Auth service could not hash password')
        return self._read(response, 'hashed_password')

    def issue_token(self, hashed_password: str, password: str,
                    user_id: str) -> str:
        """
        Exchange a password for a token.

        Raises
        ------
        :class:`.Unauthenticated`
            If the password does not match ``hashed_password``.
        :class:`.UpstreamUnavailable`

        """
        response = self._post('/token', {
            'hashed_password': hashed_password,
            'password': password,
            'uid': user_id
        })
        if response.status_code == status.HTTP_401_UNAUTHORIZED:
            raise Unauthenticated('Password does not match')
        if not status.is_success(response.status_code):
            logger.error('Token issuance failed with status %i',
                         response.status_code)
            raise UpstreamUnavailable('Auth service could not issue token')
        return self._read(response, 'token')


def init_app(app: Flask) -> None:
    """Set required configuration defaults for the application."""
    app.config.setdefault('AUTH_ADDRESS', 'localhost:8000')
    app.config.setdefault('AUTH_TIMEOUT', '5')


def get_session(app: Optional[Flask] = None) -> AuthServiceSession:
    """Create a new :class:`.AuthServiceSession` from config."""
    config = get_application_config(app)
    endpoint = config.get('AUTH_ADDRESS', 'localhost:8000')
    timeout = float(config.get('AUTH_TIMEOUT', '5'))
    return AuthServiceSession(endpoint, timeout)


def current_session(app: Optional[Flask] = None) -> AuthServiceSession:
    """Get the auth session for this context (if there is one)."""
    g = get_application_global()
    if g:
        if 'auth' not in g:
            g.auth = get_session(app)   # type: ignore
        return g.auth   # type: ignore
    return get_session(app)
