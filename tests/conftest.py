"""Shared fixtures: a requests session whose transport is a recording stub."""

import io
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter

from kickbox import Client

API_KEY = "a_valid_api_key"
BASE_URL = "http://kickbox.test"


class StubAdapter(BaseAdapter):
    """Answers requests from a (method, path) table and records what was sent."""

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.sent = []
        self.send_kwargs = []
        self.error = None

    def add(self, method, path, status=200, body=""):
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[(method, path)] = (status, body)

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error

        key = (request.method, urlsplit(request.url).path)
        not_found = (404, b'{"success":false,"message":"no route"}')
        status, body = self.routes.get(key, not_found)

        response = requests.Response()
        response.status_code = status
        response.headers["Content-Type"] = "application/json"
        response.raw = io.BytesIO(body)
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        return response

    def close(self):
        pass

    @property
    def last(self):
        return self.sent[-1]


@pytest.fixture
def adapter():
    return StubAdapter()


@pytest.fixture
def session(adapter):
    s = requests.Session()
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    yield s
    s.close()


@pytest.fixture
def client(session):
    return Client(API_KEY, session=session, base_url=BASE_URL)
