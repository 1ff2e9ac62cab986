"""Handles signup and login requests."""

from typing import Any, Optional, Tuple

from werkzeug.exceptions import BadRequest, Unauthorized, BadGateway, \
    Conflict as ConflictError

from kubdemo.base import logging, status
from kubdemo.base.exceptions import Conflict, Unauthenticated, \
    UpstreamUnavailable, InvalidArgument
from kubdemo.users.services.auth import AuthServiceSession
from kubdemo.users.services.directory import UserDirectory

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = 'An email and a password are required'
USER_EXISTS = 'A user with that email already exists'
BAD_CREDENTIALS = 'Invalid email or password'
AUTH_UNAVAILABLE = 'Could not reach the auth service'

Response = Tuple[Optional[dict], int, dict]


def _credentials(payload: Any) -> Tuple[str, str]:
    if not isinstance(payload, dict):
        raise InvalidArgument(MISSING_CREDENTIALS)
    email = payload.get('email')
    password = payload.get('password')
    if not isinstance(email, str) or not email.strip() \
            or not isinstance(password, str) or not password.strip():
        raise InvalidArgument(MISSING_CREDENTIALS)
    return email, password


def signup(payload: Any, auth: AuthServiceSession,
           directory: UserDirectory) -> Response:
    """
    Register a new user.

    Parameters
    ----------
    payload : dict
        Should contain ``email`` and ``password``.
    auth : :class:`.AuthServiceSession`
    directory : :class:`.UserDirectory`

    Returns
    -------
    dict
        The new user's ``uid`` and ``email``.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    try:
        email, password = _credentials(payload)
    except InvalidArgument as e:
        raise BadRequest(MISSING_CREDENTIALS) from e
    if directory.get(email) is not None:
        raise ConflictError(USER_EXISTS)
    try:
        hashed = auth.hash_password(password)
    except UpstreamUnavailable as e:
        raise BadGateway(AUTH_UNAVAILABLE) from e
    try:
        user = directory.add(email, hashed)
    except Conflict as e:
        raise ConflictError(USER_EXISTS) from e
    logger.info('Created user %s', user.user_id)
    return {'uid': user.user_id, 'email': user.email}, \
        status.HTTP_201_CREATED, {}


def login(payload: Any, auth: AuthServiceSession,
          directory: UserDirectory) -> Response:
    """
    Log a user in, and get them a bearer token.

    Parameters
    ----------
    payload : dict
        Should contain ``email`` and ``password``.
    auth : :class:`.AuthServiceSession`
    directory : :class:`.UserDirectory`

    Returns
    -------
    dict
        ``{"token": ..., "uid": ...}``
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    """
    try:
        email, password = _credentials(payload)
    except InvalidArgument as e:
        raise BadRequest(MISSING_CREDENTIALS) from e
    user = directory.get(email)
    if user is None:
        logger.info('Login attempt for unknown user')
        raise Unauthorized(BAD_CREDENTIALS)
    try:
        token = auth.issue_token(user.hashed_password, password, user.user_id)
    except Unauthenticated as e:
        raise Unauthorized(BAD_CREDENTIALS) from e
    except UpstreamUnavailable as e:
        raise BadGateway(AUTH_UNAVAILABLE) from e
    return {'token': token, 'uid': user.user_id}, status.HTTP_200_OK, {}
