"""
Shared fixtures: a scripted transport mounted on a real ``requests.Session``.

Handlers receive the ``PreparedRequest`` and return a :class:`Reply` (or
raise a ``requests`` exception to simulate a network failure).
"""

import io
import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from opencode_client import OpencodeClient, RetryPolicy

BASE_URL = "http://opencode.test"


@dataclass
class Reply:
    status: int = 200
    body: Union[bytes, str, Any] = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def content(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return json.dumps(self.body).encode("utf-8")


def json_reply(value: Any, status: int = 200, headers: Optional[Dict[str, str]] = None) -> Reply:
    merged = {"Content-Type": "application/json"}
    merged.update(headers or {})
    return Reply(status, json.dumps(value).encode("utf-8"), merged)


class MockTransport(BaseAdapter):
    """Adapter that answers from a handler and records every request."""

    def __init__(self, handler: Callable[[requests.PreparedRequest], Reply]):
        super().__init__()
        self.handler = handler
        self.requests: List[requests.PreparedRequest] = []
        self.timestamps: List[float] = []
        self.timeouts: List[Any] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timestamps.append(time.monotonic())
        self.timeouts.append(timeout)
        reply = self.handler(request)

        response = requests.Response()
        response.status_code = reply.status
        response.headers = CaseInsensitiveDict(reply.headers)
        # A file-like body is served as is, so tests can fail mid-read.
        response.raw = reply.body if hasattr(reply.body, "read") else io.BytesIO(reply.content())
        response.reason = "Mock"
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        return response

    def close(self):
        pass

    # -- inspection helpers -------------------------------------------------

    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def query(self, index: int = -1) -> List[tuple]:
        return parse_qsl(urlsplit(self.requests[index].url).query, keep_blank_values=True)

    def path(self, index: int = -1) -> str:
        return urlsplit(self.requests[index].url).path

    def json_body(self, index: int = -1) -> Any:
        body = self.requests[index].body
        if body is None:
            return None
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        return json.loads(body)


def make_session(transport: MockTransport) -> requests.Session:
    session = requests.Session()
    session.trust_env = False
    session.mount("http://", transport)
    session.mount("https://", transport)
    return session


class Server:
    """A handler whose replies are queued (or fixed) by the test."""

    def __init__(self):
        self.replies: List[Union[Reply, Exception]] = []
        self.default: Optional[Reply] = None
        self.transport = MockTransport(self)

    def queue(self, *replies: Union[Reply, Exception]) -> "Server":
        self.replies.extend(replies)
        return self

    def always(self, reply: Reply) -> "Server":
        self.default = reply
        return self

    def __call__(self, request: requests.PreparedRequest) -> Reply:
        if self.replies:
            reply = self.replies.pop(0)
        elif self.default is not None:
            reply = self.default
        else:
            reply = Reply(200, b"true", {"Content-Type": "application/json"})
        if isinstance(reply, Exception):
            raise reply
        return reply


# Fast backoff so retry tests stay quick.
FAST_RETRIES = RetryPolicy(initial_delay=0.001, max_delay=0.005)


@pytest.fixture
def server():
    """Scripted server; replies default to ``true``."""
    return Server()


@pytest.fixture
def http_session(server):
    session = make_session(server.transport)
    yield session
    session.close()


@pytest.fixture
def client(server, http_session, monkeypatch):
    """Client wired to the scripted server, isolated from ``OPENCODE_*`` variables."""
    for name in (
        "OPENCODE_BASE_URL",
        "OPENCODE_DEFAULT_TIMEOUT",
        "OPENCODE_MAX_RETRIES",
        "OPENCODE_SSE_CONNECT_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    with OpencodeClient(
        base_url=BASE_URL,
        http_client=http_session,
        retry_policy=FAST_RETRIES,
        timeout=5,
    ) as c:
        yield c
