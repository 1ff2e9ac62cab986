"""Provides an app factory for the edge router."""

from typing import Optional

from flask import Flask

from kubdemo.base.errors import register_error_handlers
from kubdemo.router import routes, rules
from kubdemo.router.services import proxy


def create_app(config: Optional[dict] = None) -> Flask:
    """Initialize an instance of the edge router."""
    app = Flask('kubdemo.router', static_folder=None)
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    proxy.init_app(app)
    app.extensions['routes'] = rules.build_routes(app.config)

    # Paths are forwarded exactly as received.
    app.url_map.merge_slashes = False
    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
