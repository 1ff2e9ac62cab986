"""Provides routes for the tasks API."""

from flask import Blueprint, request, jsonify

from kubdemo.base import status
from kubdemo.tasks import controllers
from kubdemo.tasks.services import store, verifier

blueprint = Blueprint('tasks', __name__, url_prefix='')


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    return jsonify({'status': 'ok'}), status.HTTP_200_OK


@blueprint.route('/tasks', methods=['GET'])
def list_tasks() -> tuple:
    """List all of the tasks."""
    data, code, headers = controllers.list_tasks(
        request.headers.get('Authorization'),
        verifier.current_session(),
        store.current_store()
    )
    return jsonify(data), code, headers


@blueprint.route('/tasks', methods=['POST'])
def create_task() -> tuple:
    """Create a new task."""
    payload = request.get_json(force=True, silent=True)    # Ignore Content-Type.
    data, code, headers = controllers.create_task(
        request.headers.get('Authorization'),
        payload,
        verifier.current_session(),
        store.current_store()
    )
    return jsonify(data), code, headers
