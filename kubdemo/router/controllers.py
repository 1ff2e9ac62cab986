"""Routes incoming requests to a backend, and relays the answer."""

from typing import List, Mapping, Optional, Sequence, Tuple
from urllib.parse import quote

from werkzeug.exceptions import NotFound, BadGateway, GatewayTimeout

from kubdemo.base import logging
from kubdemo.base.exceptions import UpstreamUnavailable
from kubdemo.router import rules
from kubdemo.router.domain import Route, NoRouteMatched
from kubdemo.router.services.proxy import ProxySession, UpstreamTimeout, \
    RESPONSE_EXCLUDED, filter_headers, response_headers

logger = logging.getLogger(__name__)

NO_ROUTE = 'No route for this path'
BACKEND_UNAVAILABLE = 'Backend unavailable'
BACKEND_TIMEOUT = 'Backend did not respond in time'

# Characters that may appear unescaped in a path segment (RFC 3986).
PATH_SAFE = "/:@!$&'()*+,;=-._~"

Response = Tuple[bytes, int, List[Tuple[str, str]]]


def _forwarding_headers(headers: Mapping[str, str],
                        remote_addr: Optional[str]) -> dict:
    forwarded = dict(headers)
    if remote_addr:
        prior = forwarded.get('X-Forwarded-For')
        forwarded['X-Forwarded-For'] = \
            f'{prior}, {remote_addr}' if prior else remote_addr
    if 'Host' in headers:
        forwarded.setdefault('X-Forwarded-Host', headers['Host'])
    return forwarded


def forward(path: str, method: str, headers: Mapping[str, str], body: bytes,
            query_string: bytes, remote_addr: Optional[str],
            routes: Sequence[Route], proxy: ProxySession) -> Response:
    """
    Proxy a request to the backend selected by the routing table.

    Parameters
    ----------
    path : str
        Percent-decoded path of the incoming request, before rewriting.
    method : str
    headers : dict
    body : bytes
    query_string : bytes
    remote_addr : str
        Address of the client, for ``X-Forwarded-For``.
    routes : list
        Ordered routing table; see :func:`.rules.build_routes`.
    proxy : :class:`.ProxySession`

    Returns
    -------
    bytes
        The backend's response body.
    int
        The backend's status code.
    list
        The backend's end-to-end headers, as ``(name, value)`` pairs.

    """
    try:
        route, rewritten = rules.resolve(routes, path)
    except NoRouteMatched as e:
        logger.error('No route for %s', path)
        raise NotFound(NO_ROUTE) from e

    logger.debug('%s %s -> %s %s%s', method, path, route.name, route.target,
                 rewritten)
    # ``path`` arrives percent-decoded; escape it again for the backend.
    url = f'{route.target}{quote(rewritten, safe=PATH_SAFE)}'
    try:
        response = proxy.forward(method, url,
                                 _forwarding_headers(headers, remote_addr),
                                 body, query_string)
    except UpstreamTimeout as e:
        raise GatewayTimeout(BACKEND_TIMEOUT) from e
    except UpstreamUnavailable as e:
        raise BadGateway(BACKEND_UNAVAILABLE) from e
    return response.content, response.status_code, \
        filter_headers(response_headers(response), RESPONSE_EXCLUDED)
