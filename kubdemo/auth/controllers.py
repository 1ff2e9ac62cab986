"""Handles token verification, password hashing and token issuance."""

from typing import Any, Optional, Tuple

from werkzeug.exceptions import BadRequest, Unauthorized
from werkzeug.security import generate_password_hash, check_password_hash

from kubdemo.base import logging, status
from kubdemo.auth.services.tokens import TokenRegistry

logger = logging.getLogger(__name__)

INVALID_TOKEN = 'Token invalid'
MISSING_PASSWORD = 'A password is required'
MISSING_FIELDS = 'hashed_password, password and uid are required'
BAD_PASSWORD = 'Password does not match'

Response = Tuple[Optional[dict], int, dict]


def _get_str(payload: Any, key: str) -> Optional[str]:
    value = payload.get(key) if isinstance(payload, dict) else None
    return value if isinstance(value, str) and value else None


def verify_token(token: str, registry: TokenRegistry) -> Response:
    """
    Check whether ``token`` was issued by us.

    Returns
    -------
    dict
        ``{"uid": ...}`` for the owner of the token.
    int
        An HTTP status code.
    dict
        Some extra headers to add to the response.

    Raises
    ------
    :class:`werkzeug.exceptions.Unauthorized`
        If the token is not known.

    """
    uid = registry.lookup(token)
    if uid is None:
        logger.info('Rejected unknown token')
        raise Unauthorized(INVALID_TOKEN)
    return {'uid': uid}, status.HTTP_200_OK, {}


def hash_password(payload: Any) -> Response:
    """Hash the ``password`` in ``payload``."""
    password = _get_str(payload, 'password')
    if password is None:
        raise BadRequest(MISSING_PASSWORD)
    return {'hashed_password': generate_password_hash(password)}, \
        status.HTTP_200_OK, {}


def issue_token(payload: Any, registry: TokenRegistry) -> Response:
    """
    Issue a token if the password matches the stored hash.

    Parameters
    ----------
    payload : dict
        Must contain ``hashed_password`` (as stored by the users service),
        the ``password`` entered by the user, and the user's ``uid``.
    registry : :class:`.TokenRegistry`

    """
    hashed = _get_str(payload, 'hashed_password')
    password = _get_str(payload, 'password')
    uid = _get_str(payload, 'uid')
    if hashed is None or password is None or uid is None:
        raise BadRequest(MISSING_FIELDS)
    if not check_password_hash(hashed, password):
        logger.info('Password mismatch for user %s', uid)
        raise Unauthorized(BAD_PASSWORD)
    return {'token': registry.issue(uid)}, status.HTTP_200_OK, {}
