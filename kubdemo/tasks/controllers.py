"""Handles all task-related requests."""

from typing import Any, Optional, Protocol, Tuple

from werkzeug.exceptions import BadRequest, Unauthorized, BadGateway, \
    InternalServerError

from kubdemo.base import logging, status
from kubdemo.base.exceptions import Unauthenticated, UpstreamUnavailable, \
    InvalidArgument, StorageFailure
from kubdemo.tasks.domain import Task
from kubdemo.tasks.services.store import TaskStore

logger = logging.getLogger(__name__)

MISSING_TOKEN = 'Missing or malformed bearer token'
INVALID_TOKEN = 'Not a valid auth token'
AUTH_UNAVAILABLE = 'Could not verify token'
MISSING_TEXT = 'A task needs some text'
UNENCODABLE_TEXT = 'Task text is not valid unicode'
STORE_FAILED = 'Could not access the task store'

Response = Tuple[Optional[dict], int, dict]


class Verifier(Protocol):
    """Anything that can turn a token into a user ID."""

    def verify(self, token: str) -> str:
        ...


def get_bearer_token(auth_header: Optional[str]) -> str:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises
    ------
    :class:`.Unauthenticated`
        If the header is missing or is not a bearer credential.

    """
    if not auth_header:
        raise Unauthenticated('No authorization header')
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        raise Unauthenticated('Authorization header is malformed')
    return parts[1]


def _authenticate(auth_header: Optional[str], verifier: Verifier) -> str:
    """Verify the caller's token, and get their user ID."""
    try:
        token = get_bearer_token(auth_header)
    except Unauthenticated as e:
        logger.debug('Rejecting request: %s', e)
        raise Unauthorized(MISSING_TOKEN) from e
    try:
        return verifier.verify(token)
    except Unauthenticated as e:
        raise Unauthorized(INVALID_TOKEN) from e
    except UpstreamUnavailable as e:
        raise BadGateway(AUTH_UNAVAILABLE) from e


def list_tasks(auth_header: Optional[str], verifier: Verifier,
               store: TaskStore) -> Response:
    """
    List all of the stored tasks.

    Parameters
    ----------
    auth_header : str
        Value of the ``Authorization`` header on the request.
    verifier : :class:`.Verifier`
    store : :class:`.TaskStore`

    Returns
    -------
    dict
        ``{"tasks": [...]}``, in the order they were created.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    _authenticate(auth_header, verifier)
    try:
        tasks = store.list()
    except StorageFailure as e:
        raise InternalServerError(STORE_FAILED) from e
    return {'tasks': [task.to_dict() for task in tasks]}, \
        status.HTTP_200_OK, {}


def _validate(payload: Any) -> str:
    text = payload.get('text') if isinstance(payload, dict) else None
    if not isinstance(text, str) or not text:
        raise InvalidArgument(MISSING_TEXT)
    try:
        text.encode('utf-8')
    except UnicodeEncodeError as e:     # Lone surrogates.
        raise InvalidArgument(UNENCODABLE_TEXT) from e
    return text


def create_task(auth_header: Optional[str], payload: Any,
                verifier: Verifier, store: TaskStore) -> Response:
    """
    Create and store a new :class:`.Task` for the authenticated user.

    Parameters
    ----------
    auth_header : str
        Value of the ``Authorization`` header on the request.
    payload : dict
        Should contain a non-empty ``text``.
    verifier : :class:`.Verifier`
    store : :class:`.TaskStore`

    Returns
    -------
    dict
        The created task.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    user_id = _authenticate(auth_header, verifier)
    try:
        text = _validate(payload)
    except InvalidArgument as e:
        raise BadRequest(str(e)) from e
    try:
        task = store.append(Task(text=text, user_id=user_id))
    except StorageFailure as e:
        raise InternalServerError(STORE_FAILED) from e
    logger.info('Task created by user %s', user_id)
    return task.to_dict(), status.HTTP_201_CREATED, {}
