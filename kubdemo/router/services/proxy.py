"""Forwards requests to backend services over HTTP."""

from typing import Iterable, List, Mapping, Optional, Tuple

import requests
from flask import Flask

from kubdemo.base import logging
from kubdemo.base.context import get_application_config, \
    get_application_global
from kubdemo.base.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)

HOP_BY_HOP = {'connection', 'keep-alive', 'proxy-authenticate',
              'proxy-authorization', 'te', 'trailers', 'transfer-encoding',
              'upgrade'}

# Bodies are passed back decoded.
RESPONSE_EXCLUDED = HOP_BY_HOP | {'content-encoding', 'content-length'}
REQUEST_EXCLUDED = HOP_BY_HOP | {'host', 'content-length'}


class UpstreamTimeout(UpstreamUnavailable):
    """The backend did not answer in time."""


def filter_headers(headers: Iterable[Tuple[str, str]],
                   excluded: set) -> List[Tuple[str, str]]:
    """Drop headers that must not cross the proxy."""
    return [(key, value) for key, value in headers
            if key.lower() not in excluded]


def response_headers(response: requests.Response) -> List[Tuple[str, str]]:
    """
    Get the headers of a backend response, one pair per header line.

    :attr:`requests.Response.headers` folds repeated headers (e.g.
    ``Set-Cookie``) into one comma-joined value, so the raw urllib3 headers
    are used when there are any.
    """
    raw = getattr(response.raw, 'headers', None)
    if raw is not None:
        return list(raw.items())
    return list(response.headers.items())


class ProxySession(object):
    """Forwards requests within one request context; no retries."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        self._session = requests.Session()
        self._session.trust_env = False
        self._adapter = requests.adapters.HTTPAdapter(max_retries=0)
        self._session.mount('http://', self._adapter)
        self._session.mount('https://', self._adapter)

    def forward(self, method: str, url: str, headers: Mapping[str, str],
                body: bytes, query_string: bytes = b'') -> requests.Response:
        """
        Send a request to a backend, and return its response as-is.

        Parameters
        ----------
        method : str
        url : str
            Full URL on the backend, without the query string.
        headers : dict
            Headers from the incoming request.
        body : bytes
        query_string : bytes
            Raw query string from the incoming request.

        Raises
        ------
        :class:`.UpstreamTimeout`
            If the backend does not answer within the timeout.
        :class:`.UpstreamUnavailable`
            If the backend cannot be reached.

        """
        if query_string:
            url = f'{url}?{query_string.decode("latin-1")}'
        try:
            return self._session.request(
                method, url,
                headers=dict(filter_headers(headers.items(),
                                            REQUEST_EXCLUDED)),
                data=body or None,
                timeout=self.timeout,
                allow_redirects=False
            )
        except requests.exceptions.Timeout as e:
            logger.error('Backend timed out: %s %s', method, url)
            raise UpstreamTimeout(f'{url} timed out') from e
        except requests.exceptions.RequestException as e:
            logger.error('Backend unreachable: %s %s: %s', method, url, e)
            raise UpstreamUnavailable(f'{url} unreachable') from e


def init_app(app: Flask) -> None:
    """Set required configuration defaults for the application."""
    app.config.setdefault('PROXY_TIMEOUT', '30')


def get_session(app: Optional[Flask] = None) -> ProxySession:
    """Create a new :class:`.ProxySession` from config."""
    config = get_application_config(app)
    return ProxySession(float(config.get('PROXY_TIMEOUT', '30')))


def current_session(app: Optional[Flask] = None) -> ProxySession:
    """Get the proxy session for this context (if there is one)."""
    g = get_application_global()
    if g:
        if 'proxy' not in g:
            g.proxy = get_session(app)  # type: ignore
        return g.proxy  # type: ignore
    return get_session(app)
