"""Provides an app factory for the tasks service."""

from typing import Optional

from flask import Flask

from kubdemo.base.errors import register_error_handlers
from kubdemo.tasks import routes
from kubdemo.tasks.services import store, verifier


def create_app(config: Optional[dict] = None) -> Flask:
    """Initialize an instance of the tasks service."""
    app = Flask('kubdemo.tasks', static_folder=None)
    app.config.from_pyfile('config.py')
    if config:
        app.config.update(config)

    verifier.init_app(app)
    store.init_app(app)

    app.register_blueprint(routes.blueprint)
    register_error_handlers(app)
    return app
