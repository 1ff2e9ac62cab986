"""Fixtures wiring the services together in-process."""

from typing import Dict
from unittest import mock
from urllib.parse import urlsplit

import pytest
import requests
from flask import Flask
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from kubdemo.auth.factory import create_app as create_auth_app
from kubdemo.router.factory import create_app as create_router_app
from kubdemo.tasks.factory import create_app as create_tasks_app
from kubdemo.users.factory import create_app as create_users_app

RealSession = requests.Session


class WSGIAdapter(BaseAdapter):
    """Sends requests to a Flask app's test client instead of the network."""

    def __init__(self, app: Flask) -> None:
        super().__init__()
        self.app = app
        self.calls = 0

    def send(self, request: requests.PreparedRequest, **kwargs) \
            -> requests.Response:
        self.calls += 1
        url = urlsplit(request.url)
        headers = {k: v for k, v in request.headers.items()
                   if k.lower() != 'content-length'}
        body = request.body
        if isinstance(body, str):
            body = body.encode('utf-8')
        client = self.app.test_client()
        answer = client.open(url.path, method=request.method,
                             query_string=url.query, headers=headers,
                             data=body or b'')

        response = requests.Response()
        response.status_code = answer.status_code
        response.headers = CaseInsensitiveDict(answer.headers)
        response._content = answer.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


class DownAdapter(BaseAdapter):
    """A backend that cannot be reached."""

    def send(self, request: requests.PreparedRequest, **kwargs) \
            -> requests.Response:
        raise requests.exceptions.ConnectionError(f'{request.url} is down')

    def close(self) -> None:
        pass


@pytest.fixture()
def cluster(tmp_path):
    """Auth, users, tasks and router apps talking to each other."""
    apps = {
        'auth.test': create_auth_app({'STATIC_TOKENS': 'abc:u1'}),
        'users.test': create_users_app({'AUTH_ADDRESS': 'auth.test'}),
        'tasks.test': create_tasks_app({'AUTH_ADDRESS': 'auth.test',
                                        'TASKS_FOLDER': str(tmp_path)}),
    }
    apps['router.test'] = create_router_app({
        'AUTH_SERVICE_URL': 'auth.test',
        'USERS_SERVICE_URL': 'users.test',
        'TASKS_SERVICE_URL': 'tasks.test',
        'FRONTEND_URL': 'frontend.test',
    })
    adapters: Dict[str, BaseAdapter] = {
        host: WSGIAdapter(app) for host, app in apps.items()
    }
    adapters['frontend.test'] = DownAdapter()

    def make_session() -> requests.Session:
        session = RealSession()
        for host, adapter in adapters.items():
            session.mount(f'http://{host}', adapter)
        return session

    with mock.patch('requests.Session', side_effect=make_session):
        yield {'apps': apps, 'adapters': adapters,
               'client': apps['router.test'].test_client(),
               'task_file': tmp_path / 'tasks.jsonl'}
