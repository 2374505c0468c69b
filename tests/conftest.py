# Copyright (c) Goodcatch.
# Licensed under the MIT license.

"""
Shared pytest fixtures for FXK SDK tests.

``DummyHTTP`` stands in for :class:`fxk.core.http.HttpClient`: it replays
queued ``(status, body)`` tuples or raises queued exceptions, and records
every request it receives.
"""

import json

import pytest

from fxk.client import FxkClient
from fxk.core.config import FxkConfig

TOKEN_OK = {
    "errorCode": 0,
    "errorMessage": "success",
    "corpId": "FSCID_1",
    "corpAccessToken": "TOKEN_1",
    "expiresIn": 7200,
}


class DummyResponse:
    def __init__(self, status, body, headers=None):
        self.status_code = status
        self.headers = headers or {}
        self._body = body
        if isinstance(body, (dict, list)):
            self.text = json.dumps(body)
        else:
            self.text = body or ""

    def json(self):
        if isinstance(self._body, (dict, list)):
            return self._body
        raise ValueError("non-json")


class DummyHTTP:
    def __init__(self, responses=None):
        self._responses = list(responses or [])
        self.calls = []

    def queue(self, *responses):
        self._responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise AssertionError("No more responses")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        status, body = item
        return DummyResponse(status, body)

    def bodies(self):
        return [json.loads(c["data"].decode("utf-8")) for c in self.calls]

    def urls(self):
        return [c["url"] for c in self.calls]


@pytest.fixture
def config():
    return FxkConfig(
        app_id="FSAID_test",
        app_secret="secret",
        permanent_code="perm",
        url="https://open.example.com/cgi/",
        timeout=5,
    )


@pytest.fixture
def http():
    return DummyHTTP()


@pytest.fixture
def client(config, http):
    c = FxkClient(config)
    c.pipeline._http = http
    return c


@pytest.fixture
def token_payload():
    return dict(TOKEN_OK)
