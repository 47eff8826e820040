import json
import os
import sys
from types import SimpleNamespace

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from utils.rate_limiter import rate_limiter
from utils.security_utils import ADMIN_TOKEN_COOKIE_KEY

API_BASE = 'http://api.test/api'


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self._body = body
        self.content = b'' if body is None else json.dumps(body).encode()

    def json(self):
        return self._body


class FakeApi:
    """
    Stand-in for requests.Session: canned responses keyed by (method, path),
    every call recorded. Unknown routes answer 404.
    """

    def __init__(self, base_url=API_BASE):
        self.base_url = base_url
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=None, status=200):
        self.routes[(method, path)] = FakeResponse(status, {} if body is None else body)

    def fail(self, method, path, exc):
        self.routes[(method, path)] = exc

    def request(self, method, url, params=None, json=None, data=None, files=None,
                headers=None, timeout=None):
        path = url[len(self.base_url):]
        self.calls.append(SimpleNamespace(
            method=method, path=path, params=params, json=json, data=data,
            files=files, headers=headers or {}, timeout=timeout,
        ))
        response = self.routes.get((method, path))
        if response is None:
            return FakeResponse(404, {'message': 'Not found'})
        if isinstance(response, Exception):
            raise response
        return response

    def calls_to(self, method, path):
        return [call for call in self.calls if call.method == method and call.path == path]

    def last(self, method, path):
        matching = self.calls_to(method, path)
        assert matching, f"no {method} {path} call recorded"
        return matching[-1]


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'API_BASE_URL': API_BASE,
    'CSRF_ENABLED': False,
    'RATE_LIMIT_ENABLED': False,
}


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def make_app(fake_api):
    def _make_app(**overrides):
        config = dict(TEST_CONFIG)
        config.update(overrides)
        return create_app(config, http_session=fake_api)
    return _make_app


@pytest.fixture
def app(make_app):
    rate_limiter.reset()
    yield make_app()
    rate_limiter.reset()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Mark the test client as signed in."""
    def _login(token='test-token'):
        client.set_cookie(ADMIN_TOKEN_COOKIE_KEY, token)
        return client
    return _login


@pytest.fixture
def auth_client(login):
    return login()
