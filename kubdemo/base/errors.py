"""Render HTTP errors as JSON."""

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException, BadRequest, Unauthorized, \
    NotFound, MethodNotAllowed, Conflict, InternalServerError, BadGateway, \
    GatewayTimeout


def jsonify_exception(error: HTTPException) -> Response:
    """Render exceptions as JSON."""
    exc_resp = error.get_response()
    response: Response = jsonify(reason=error.description)
    response.status_code = exc_resp.status_code
    return response


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(BadRequest)(jsonify_exception)
    app.errorhandler(Unauthorized)(jsonify_exception)
    app.errorhandler(NotFound)(jsonify_exception)
    app.errorhandler(MethodNotAllowed)(jsonify_exception)
    app.errorhandler(Conflict)(jsonify_exception)
    app.errorhandler(InternalServerError)(jsonify_exception)
    app.errorhandler(BadGateway)(jsonify_exception)
    app.errorhandler(GatewayTimeout)(jsonify_exception)
