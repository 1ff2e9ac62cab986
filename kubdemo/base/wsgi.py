"""Web Server Gateway Interface entry-point helpers."""

import os
from typing import Callable, Iterable, Optional

from flask import Flask


def application_for(factory: Callable[[], Flask]) -> Callable:
    """
    Build a WSGI callable that lazily creates the app with ``factory``.

    The WSGI environ is copied into :data:`os.environ` before the app is
    created, so that uWSGI/gunicorn ``env`` settings reach ``config.py``.
    """
    flask_app: Optional[Flask] = None

    def application(environ: dict, start_response: Callable) -> Iterable:
        """WSGI application."""
        nonlocal flask_app
        for key, value in environ.items():
            # uWSGI passes the container hostname as SERVER_NAME, which is of
            # no use for building URLs.
            if key == 'SERVER_NAME' or not isinstance(value, str):
                continue
            os.environ[key] = value
        if flask_app is None:
            flask_app = factory()
        return flask_app(environ, start_response)
    return application
