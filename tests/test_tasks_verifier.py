"""Tests for :mod:`kubdemo.tasks.services.verifier`."""

import json
from typing import Any
from unittest import TestCase, mock

import requests

from kubdemo.base.exceptions import Unauthenticated, UpstreamUnavailable
from kubdemo.tasks.services import verifier


def mock_session_with(mock_session: Any, **get_kwargs: Any) -> mock.MagicMock:
    """Make ``requests.Session()`` return a session whose ``get`` is mocked."""
    mock_get = mock.MagicMock(**get_kwargs)
    mock_session_instance = mock.MagicMock()
    type(mock_session_instance).get = mock_get
    mock_session.return_value = mock_session_instance
    return mock_get


class TestVerify(TestCase):
    """:meth:`.AuthVerifierSession.verify` asks auth who owns a token."""

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_valid_token(self, mock_session: Any) -> None:
        """A 200 with a uid yields the uid."""
        response = mock.MagicMock(status_code=200, ok=True,
                                  json=mock.MagicMock(return_value={
                                      'message': 'Valid token.', 'uid': 'u1'
                                  }))
        mock_get = mock_session_with(mock_session, return_value=response)

        session = verifier.AuthVerifierSession('auth-service:80', 2)
        self.assertEqual(session.verify('abc'), 'u1')

        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], 'http://auth-service:80/verify-token/abc')
        self.assertEqual(kwargs['timeout'], 2)

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_token_is_quoted(self, mock_session: Any) -> None:
        """Tokens can't escape the verify-token path."""
        response = mock.MagicMock(status_code=200, ok=True,
                                  json=mock.MagicMock(return_value={
                                      'uid': 'u1'
                                  }))
        mock_get = mock_session_with(mock_session, return_value=response)

        verifier.AuthVerifierSession('http://auth/', 2).verify('../a b')
        self.assertEqual(mock_get.call_args[0][0],
                         'http://auth/verify-token/..%2Fa%20b')

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_rejected_token(self, mock_session: Any) -> None:
        """Any non-2xx status means the token is no good."""
        for code in (401, 403, 404, 500):
            response = mock.MagicMock(status_code=code, ok=False)
            mock_session_with(mock_session, return_value=response)
            session = verifier.AuthVerifierSession('auth', 2)
            with self.assertRaises(Unauthenticated):
                session.verify('abc')

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_connection_error(self, mock_session: Any) -> None:
        """If auth can't be reached, raises :class:`.UpstreamUnavailable`."""
        mock_session_with(mock_session,
                          side_effect=requests.exceptions.ConnectionError)
        session = verifier.AuthVerifierSession('auth', 2)
        with self.assertRaises(UpstreamUnavailable):
            session.verify('abc')

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_timeout(self, mock_session: Any) -> None:
        """A slow auth service is an unavailable auth service."""
        mock_session_with(mock_session,
                          side_effect=requests.exceptions.Timeout)
        session = verifier.AuthVerifierSession('auth', 2)
        with self.assertRaises(UpstreamUnavailable):
            session.verify('abc')

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_garbage_response(self, mock_session: Any) -> None:
        """A 200 without a usable uid raises :class:`.UpstreamUnavailable`."""
        def raise_decoderror() -> None:
            raise json.decoder.JSONDecodeError('msg', 'doc', 0)

        bad_bodies = [
            mock.MagicMock(side_effect=raise_decoderror),
            mock.MagicMock(return_value={'message': 'Valid token.'}),
            mock.MagicMock(return_value={'uid': 42}),
            mock.MagicMock(return_value=['u1']),
        ]
        for body in bad_bodies:
            response = mock.MagicMock(status_code=200, ok=True, json=body)
            mock_session_with(mock_session, return_value=response)
            session = verifier.AuthVerifierSession('auth', 2)
            with self.assertRaises(UpstreamUnavailable):
                session.verify('abc')


class TestSessionFromConfig(TestCase):
    """:func:`.get_session` reads the auth address from config."""

    def test_get_session(self) -> None:
        """Config values are used."""
        app = mock.MagicMock(config={'AUTH_ADDRESS': 'auth.default:8080',
                                     'AUTH_TIMEOUT': '1.5'})
        session = verifier.get_session(app)
        self.assertEqual(session.endpoint, 'http://auth.default:8080')
        self.assertEqual(session.timeout, 1.5)
