"""
HTTP client for the upstream learning platform API.

Every request carries `Authorization: Bearer <token>` when the admin token
cookie is present. Any transport failure or non-2xx answer is raised as
ApiError; there is no retry.
"""
import requests
from flask import current_app, has_request_context

from utils.logging_utils import api_logger, log_debug, log_error
from utils.security_utils import get_admin_token


class ApiError(Exception):
    """The single error kind raised for failed API calls."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class HttpClient:
    """
    Thin wrapper around a requests.Session bound to the API base URL.

    Args:
        base_url (str): API base, e.g. http://localhost:5000/api
        timeout (float): Seconds before an upstream call is abandoned
        session: requests.Session (or anything with the same request() method)
        token_provider: Callable returning the bearer token or None
    """

    def __init__(self, base_url, timeout=30, session=None, token_provider=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.token_provider = token_provider or _cookie_token

    def build_url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def auth_headers(self):
        headers = {'Accept': 'application/json'}
        token = self.token_provider()
        if token:
            headers['Authorization'] = f"Bearer {token}"
        return headers

    def request(self, method, path, params=None, json=None, data=None, files=None):
        url = self.build_url(path)
        log_debug(api_logger, "API request", method=method, url=url)
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                data=data,
                files=files,
                headers=self.auth_headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log_error(api_logger, "API transport error", method=method, url=url, error=str(e))
            raise ApiError(f"Could not reach API: {e}") from e

        payload = _decode_body(response)
        if not 200 <= response.status_code < 300:
            message = payload.get('message') or payload.get('error') or 'API request failed'
            log_error(api_logger, "API request failed", method=method, url=url,
                      status=response.status_code, server_message=message)
            raise ApiError(message, status_code=response.status_code, payload=payload)

        return payload

    def get(self, path, params=None):
        return self.request('GET', path, params=params)

    def post(self, path, json=None, data=None, files=None):
        return self.request('POST', path, json=json, data=data, files=files)

    def put(self, path, json=None):
        return self.request('PUT', path, json=json)

    def delete(self, path):
        return self.request('DELETE', path)


def _decode_body(response):
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {'items': body}


def _cookie_token():
    if not has_request_context():
        return None
    return get_admin_token()


def get_api_client():
    """Return the HttpClient registered on the current app."""
    return current_app.extensions['api_client']


# Module-level shortcuts used by the services
def get(path, params=None):
    return get_api_client().get(path, params=params)

def post(path, json=None, data=None, files=None):
    return get_api_client().post(path, json=json, data=data, files=files)

def put(path, json=None):
    return get_api_client().put(path, json=json)

def delete(path):
    return get_api_client().delete(path)
