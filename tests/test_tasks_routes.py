"""API tests for the tasks service."""

import json
import os
import tempfile
from typing import Any
from unittest import TestCase, mock

import jsonschema
import requests

from kubdemo.tasks.factory import create_app

SCHEMA_DIR = os.path.join(os.path.dirname(__file__), '..', 'schema')


def load_schema(name: str) -> dict:
    """Load a JSON schema from ``schema/``."""
    with open(os.path.join(SCHEMA_DIR, name)) as f:
        return json.load(f)


def auth_says(mock_session: Any, code: int, body: Any = None) -> mock.MagicMock:
    """Make the auth service answer every verification with ``code``."""
    response = mock.MagicMock(status_code=code, ok=200 <= code < 300,
                              json=mock.MagicMock(return_value=body))
    mock_get = mock.MagicMock(return_value=response)
    mock_session_instance = mock.MagicMock()
    type(mock_session_instance).get = mock_get
    mock_session.return_value = mock_session_instance
    return mock_get


class TestTasksAPI(TestCase):
    """Requests to the tasks API."""

    def setUp(self) -> None:
        self.workdir = tempfile.TemporaryDirectory()
        self.app = create_app({'TASKS_FOLDER': self.workdir.name,
                               'AUTH_ADDRESS': 'auth-service:80'})
        self.client = self.app.test_client()
        self.task_file = os.path.join(self.workdir.name, 'tasks.jsonl')

    def tearDown(self) -> None:
        self.workdir.cleanup()

    def test_status(self) -> None:
        """The health check needs no token."""
        response = self.client.get('/status')
        self.assertEqual(response.status_code, 200)

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_create_then_list(self, mock_session: Any) -> None:
        """A created task shows up in the list, tagged with its creator."""
        mock_get = auth_says(mock_session, 200, {'uid': 'u1'})

        response = self.client.post('/tasks', data=json.dumps({
            'text': 'Learn Kubernetes'
        }), headers={'Authorization': 'Bearer abc'},
            content_type='application/json')
        self.assertEqual(response.status_code, 201, 'Created')
        self.assertEqual(json.loads(response.data),
                         {'text': 'Learn Kubernetes', 'userId': 'u1'})
        jsonschema.validate(json.loads(response.data), load_schema('task.json'))

        response = self.client.get('/tasks',
                                   headers={'Authorization': 'Bearer abc'})
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.data)
        self.assertEqual(data, {'tasks': [{'text': 'Learn Kubernetes',
                                           'userId': 'u1'}]})
        jsonschema.validate(data, load_schema('tasks.json'))

        self.assertEqual(mock_get.call_count, 2, 'One verification each')
        self.assertEqual(mock_get.call_args[0][0],
                         'http://auth-service:80/verify-token/abc')

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_create_ignores_content_type(self, mock_session: Any) -> None:
        """The body is parsed as JSON whatever the Content-Type says."""
        auth_says(mock_session, 200, {'uid': 'u1'})
        response = self.client.post('/tasks', data='{"text": "plain"}',
                                    headers={'Authorization': 'Bearer abc'},
                                    content_type='text/plain')
        self.assertEqual(response.status_code, 201)

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_no_token(self, mock_session: Any) -> None:
        """Without a token, both operations are 401 and auth isn't asked."""
        mock_get = auth_says(mock_session, 200, {'uid': 'u1'})
        response = self.client.get('/tasks')
        self.assertEqual(response.status_code, 401)
        jsonschema.validate(json.loads(response.data),
                            load_schema('error.json'))

        response = self.client.post('/tasks', data=json.dumps({'text': 'x'}),
                                    content_type='application/json')
        self.assertEqual(response.status_code, 401)
        mock_get.assert_not_called()
        self.assertFalse(os.path.exists(self.task_file))

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_rejected_token(self, mock_session: Any) -> None:
        """If auth rejects the token, 401 and nothing is stored."""
        auth_says(mock_session, 401, {'message': 'Token invalid.'})
        response = self.client.post('/tasks', data=json.dumps({'text': 'x'}),
                                    headers={'Authorization': 'Bearer nope'},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 401)
        self.assertIn('reason', json.loads(response.data))
        self.assertFalse(os.path.exists(self.task_file))

        response = self.client.get('/tasks',
                                   headers={'Authorization': 'Bearer nope'})
        self.assertEqual(response.status_code, 401)

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_auth_unreachable(self, mock_session: Any) -> None:
        """If auth is down, 502 and the store is never touched."""
        mock_get = mock.MagicMock(
            side_effect=requests.exceptions.ConnectionError)
        mock_session_instance = mock.MagicMock()
        type(mock_session_instance).get = mock_get
        mock_session.return_value = mock_session_instance

        with mock.patch('kubdemo.tasks.services.store.TaskStore.list') \
                as mock_list:
            response = self.client.get(
                '/tasks', headers={'Authorization': 'Bearer abc'})
            self.assertEqual(response.status_code, 502)
            mock_list.assert_not_called()

        response = self.client.post('/tasks', data=json.dumps({'text': 'x'}),
                                    headers={'Authorization': 'Bearer abc'},
                                    content_type='application/json')
        self.assertEqual(response.status_code, 502)
        self.assertFalse(os.path.exists(self.task_file))

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_empty_text(self, mock_session: Any) -> None:
        """Empty text is a 400, and nothing is stored."""
        auth_says(mock_session, 200, {'uid': 'u1'})
        for body in ('{"text": ""}', '{}', 'not json'):
            response = self.client.post(
                '/tasks', data=body, headers={'Authorization': 'Bearer abc'},
                content_type='application/json')
            self.assertEqual(response.status_code, 400)
        self.assertFalse(os.path.exists(self.task_file))

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_lone_surrogate_text(self, mock_session: Any) -> None:
        """Valid JSON that isn't valid unicode is a 400, not a crash."""
        auth_says(mock_session, 200, {'uid': 'u1'})
        response = self.client.post(
            '/tasks', data='{"text": "\\ud800"}',
            headers={'Authorization': 'Bearer abc'},
            content_type='application/json')
        self.assertEqual(response.status_code, 400)
        jsonschema.validate(json.loads(response.data),
                            load_schema('error.json'))
        self.assertFalse(os.path.exists(self.task_file))

    @mock.patch('kubdemo.tasks.services.verifier.requests.Session')
    def test_storage_failure(self, mock_session: Any) -> None:
        """A corrupted store is a 500."""
        auth_says(mock_session, 200, {'uid': 'u1'})
        with open(self.task_file, 'w') as f:
            f.write('garbage\n')
        response = self.client.get('/tasks',
                                   headers={'Authorization': 'Bearer abc'})
        self.assertEqual(response.status_code, 500)

    def test_unknown_route(self) -> None:
        """Unknown paths are JSON 404s."""
        response = self.client.get('/')
        self.assertEqual(response.status_code, 404)
        self.assertIn('reason', json.loads(response.data))
