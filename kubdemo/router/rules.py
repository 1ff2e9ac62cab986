"""The routing table, and path resolution."""

import re
from typing import Mapping, Sequence, Tuple, List

from kubdemo.base.addresses import service_url
from kubdemo.router.domain import Route, NoRouteMatched

PREFIXED = r'^/{prefix}(/|$)(.*)'
PREFIX_REWRITE = r'/\2'
FALLBACK = r'^/(.*)'
FALLBACK_REWRITE = r'/\1'

SERVICES = [
    ('auth', 'AUTH_SERVICE_URL'),
    ('users', 'USERS_SERVICE_URL'),
    ('tasks', 'TASKS_SERVICE_URL'),
]


def build_routes(config: Mapping) -> List[Route]:
    """
    Build the ordered routing table from config.

    The service prefixes come first, in the order above; the frontend
    catch-all comes last.
    """
    routes = [
        Route(name=prefix,
              pattern=re.compile(PREFIXED.format(prefix=re.escape(prefix))),
              target=service_url(config[key]),
              rewrite=PREFIX_REWRITE)
        for prefix, key in SERVICES
    ]
    routes.append(Route(name='frontend', pattern=re.compile(FALLBACK),
                        target=service_url(config['FRONTEND_URL']),
                        rewrite=FALLBACK_REWRITE))
    return routes


def resolve(routes: Sequence[Route], path: str) -> Tuple[Route, str]:
    """
    Find the first route that matches ``path``.

    Returns
    -------
    :class:`.Route`
        The matching route.
    str
        The path to request from the route's target.

    Raises
    ------
    :class:`.NoRouteMatched`

    """
    for route in routes:
        rewritten = route.apply(path)
        if rewritten is not None:
            return route, rewritten
    raise NoRouteMatched(f'No route for {path}')
