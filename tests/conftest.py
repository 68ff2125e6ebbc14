"""Shared fixtures: a recording stand-in for the network."""

from __future__ import annotations

from typing import Optional

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from basichttp import HttpsTransport, Message, Request


class StubAdapter(BaseAdapter):
    """
    Transport adapter answering every request with a canned response.

    Records each PreparedRequest and the send() options so tests can
    check what would have gone over the wire.
    """

    def __init__(
        self,
        status_code: int = 200,
        reason: str = "OK",
        body: bytes = b"",
        headers: Optional[dict[str, str]] = None,
        error: Optional[Exception] = None,
        final_url: Optional[str] = None,
    ):
        super().__init__()
        self.status_code = status_code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
        self.error = error
        self.final_url = final_url
        self.sent: list[requests.PreparedRequest] = []
        self.options: list[dict] = []
        self.closed = False

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        self.options.append({"timeout": timeout, "verify": verify, "cert": cert})
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status_code
        response.reason = self.reason
        response.headers = CaseInsensitiveDict(self.headers)
        response._content = self.body
        response._content_consumed = True
        response.url = self.final_url or request.url
        response.request = request
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def adapter():
    """Stub adapter answering 200 with a small text body."""
    return StubAdapter(
        body=b"hello",
        headers={"Content-Type": "text/plain; charset=utf-8", "X-Served-By": "stub"},
    )


@pytest.fixture
def request_factory(adapter):
    """Build requests wired to the stub adapter."""

    def make(endpoint: str = "http://example.com/path", cls=Request, **kwargs):
        request = cls(adapter=adapter, **kwargs)
        request.endpoint = endpoint
        request.message = Message()
        if endpoint.lower().startswith("https"):
            request.transport = HttpsTransport()
        return request

    return make
