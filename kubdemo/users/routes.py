"""Provides routes for the users API."""

from flask import Blueprint, request, jsonify

from kubdemo.base import status
from kubdemo.users import controllers
from kubdemo.users.services import auth, directory

blueprint = Blueprint('users', __name__, url_prefix='')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    return jsonify({'status': 'ok'}), status.HTTP_200_OK


@blueprint.route('/signup', methods=['POST'])
def signup() -> tuple:
    """Register a new user."""
    payload = request.get_json(force=True, silent=True)
    data, code, headers = controllers.signup(
        payload, auth.current_session(), directory.current_directory())
    return jsonify(data), code, headers


@blueprint.route('/login', methods=['POST'])
def login() -> tuple:
    """Log in, and get a token."""
    payload = request.get_json(force=True, silent=True)
    data, code, headers = controllers.login(
        payload, auth.current_session(), directory.current_directory())
    return jsonify(data), code, headers
