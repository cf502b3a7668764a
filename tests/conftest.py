"""Shared fixtures: an in-memory transport and a listener that records events."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from blogwire.client import XmlRpcBlog
from blogwire.config import Settings
from blogwire.core.category_cache import CategoryStore
from blogwire.events import BlogListener


@dataclass
class Request:
    kind: str
    token: int
    method: str = ""
    args: list[Any] = field(default_factory=list)
    url: str = ""
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


class FakeTransport:
    """Records every request; tests complete them by hand."""

    def __init__(self):
        self.listener = None
        self.requests: list[Request] = []

    def bind(self, listener):
        self.listener = listener

    def call(self, method, args, token):
        self.requests.append(Request("call", token, method=method, args=list(args)))
        return token

    def post(self, url, body, headers, token):
        self.requests.append(Request("post", token, url=url, body=body, headers=dict(headers)))
        return token

    def get(self, url, token):
        self.requests.append(Request("get", token, url=url))
        return token

    @property
    def last(self) -> Request:
        return self.requests[-1]

    def calls(self, method: str) -> list[Request]:
        return [r for r in self.requests if r.method == method]

    def succeed(self, request: Request, payload: Any) -> None:
        self.listener.on_success(request.token, payload)

    def fail(self, request: Request, code: int = 500, message: str = "Internal Server Error") -> None:
        self.listener.on_failure(request.token, code, message)


class RecordingListener(BlogListener):
    def __init__(self):
        self.events: list[tuple[str, tuple]] = []

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[tuple]:
        return [args for event, args in self.events if event == name]


def _recorder(name):
    def record(self, *args):
        self.events.append((name, args))

    return record


for _name in [n for n in vars(BlogListener) if not n.startswith("_")]:
    setattr(RecordingListener, _name, _recorder(_name))


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path)


@pytest.fixture
def store(settings):
    return CategoryStore(settings.categories_dir)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def listener():
    return RecordingListener()


BLOG_URL = "http://blog.example.com/xmlrpc.php"


@pytest.fixture
def make_blog(transport, listener, store, settings):
    """Build an XmlRpcBlog wired to the fake transport and recording listener."""

    def factory(dialect="movabletype", **kwargs):
        kwargs.setdefault("username", "alice")
        kwargs.setdefault("password", "secret")
        kwargs.setdefault("blog_id", "1")
        return XmlRpcBlog(
            BLOG_URL,
            dialect,
            transport,
            listener=listener,
            store=store,
            settings=settings,
            **kwargs,
        )

    return factory
