"""Provides an app factory for the users service."""

from typing import Optional

from flask import Flask

from kubdemo.base.errors import register_error_handlers
from kubdemo.users import routes
from kubdemo.users.services import auth, directory


def create_app(config: Optional[dict] = None) -> Flask:
    """Initialize an instance of the users service."""
    app = Flask('kubdemo.users', static_folder=None)
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    auth.init_app(app)
    directory.init_app(app)

    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
