"""Provides an app factory for the auth service."""

from typing import Optional

from flask import Flask

from kubdemo.base.errors import register_error_handlers
from kubdemo.auth import routes
from kubdemo.auth.services import tokens


def create_app(config: Optional[dict] = None) -> Flask:
    """Initialize an instance of the auth service."""
    app = Flask('kubdemo.auth', static_folder=None)
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    tokens.init_app(app)

    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
