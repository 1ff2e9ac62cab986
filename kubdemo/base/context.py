"""Helpers for reaching Flask app config and globals from service modules."""

import os
from typing import Any, Mapping, Optional

from flask import current_app, g, has_app_context


def get_application_config(app: Optional[Any] = None) -> Mapping:
    """
    Get a configuration from the current app, or from the environment.

    Parameters
    ----------
    app : :class:`flask.Flask`
        If provided, its config is used directly.

    Returns
    -------
    Mapping
        Application config, or :data:`os.environ` outside of an app context.

    """
    if app is not None:
        return app.config
    if has_app_context():
        return current_app.config
    return os.environ


def get_application_global() -> Optional[Any]:
    """Get the :data:`flask.g` object, or ``None`` outside an app context."""
    if has_app_context():
        return g
    return None
