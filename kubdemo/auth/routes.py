"""Provides routes for the auth API."""

from flask import Blueprint, request, jsonify

from kubdemo.base import status
from kubdemo.auth import controllers
from kubdemo.auth.services import tokens

blueprint = Blueprint('auth', __name__, url_prefix='')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    return jsonify({'status': 'ok'}), status.HTTP_200_OK


@blueprint.route('/verify-token/<string:token>', methods=['GET'])
def verify_token(token: str) -> tuple:
    """Verify a token, and identify its owner."""
    data, code, headers = controllers.verify_token(
        token, tokens.current_registry())
    return jsonify(data), code, headers


@blueprint.route('/hashed-password', methods=['POST'])
def hash_password() -> tuple:
    """Hash a password."""
    payload = request.get_json(force=True, silent=True)
    data, code, headers = controllers.hash_password(payload)
    return jsonify(data), code, headers


@blueprint.route('/token', methods=['POST'])
def issue_token() -> tuple:
    """Issue a token in exchange for a password."""
    payload = request.get_json(force=True, silent=True)
    data, code, headers = controllers.issue_token(
        payload, tokens.current_registry())
    return jsonify(data), code, headers
