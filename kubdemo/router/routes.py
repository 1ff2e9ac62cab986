"""Catch-all route that hands every request to the router."""

from flask import Blueprint, Response, current_app, request

from kubdemo.router import controllers
from kubdemo.router.services import proxy

blueprint = Blueprint('router', __name__, url_prefix='')

METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


@blueprint.route('/', defaults={'path': ''}, methods=METHODS)
@blueprint.route('/<path:path>', methods=METHODS)
def forward(path: str) -> Response:
    """Forward the request to whichever backend owns the path."""
    body, code, headers = controllers.forward(
        request.path,
        request.method,
        dict(request.headers),
        request.get_data(),
        request.query_string,
        request.remote_addr,
        current_app.extensions['routes'],
        proxy.current_session()
    )
    return Response(body, status=code, headers=headers)
