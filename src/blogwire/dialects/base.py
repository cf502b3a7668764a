"""Strategy types an XML-RPC dialect is assembled from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol

from blogwire.core.category_cache import CategoryCache
from blogwire.models.post import Post


class Operation(str, Enum):
    """Post operations whose XML-RPC method name differs between dialects."""

    FETCH_POST = "fetch_post"
    CREATE_POST = "create_post"
    MODIFY_POST = "modify_post"
    RECENT_POSTS = "recent_posts"


@dataclass(frozen=True)
class Credentials:
    blog_id: str
    username: str
    password: str
    app_key: str = ""


@dataclass(frozen=True)
class RawRequest:
    """A request sent as a literal HTTP body instead of through the XML-RPC codec."""

    body: bytes
    headers: Mapping[str, str]


class RequestBuilder(Protocol):
    def default_args(self, creds: Credentials, object_id: str) -> list[Any]:
        """Leading arguments of post calls: the id, then the credentials."""
        ...

    def post_args(self, post: Post) -> list[Any]:
        """Trailing arguments carrying the post itself and the publish flag."""
        ...


class ResponseReader(Protocol):
    def read_post(
        self, post: Post, info: Mapping[str, Any], cache: CategoryCache
    ) -> list[str]:
        """Copy the fields of ``info`` into ``post``.

        Returns the category names found in the response.
        """
        ...


class RawWriter(Protocol):
    """Hand-built create/modify requests for servers that mishandle the codec."""

    def build(self, creds: Credentials, post: Post, operation: Operation) -> RawRequest:
        ...

    def read_reply(self, text: str, operation: Operation) -> str | bool:
        ...


@dataclass(frozen=True)
class Dialect:
    """A wire dialect assembled from pluggable strategies."""

    name: str
    interface_name: str
    methods: Mapping[Operation, str]
    builder: RequestBuilder
    reader: ResponseReader
    supports_categories: bool = False
    supports_media: bool = False
    supports_trackbacks: bool = False
    category_aware: bool = False
    raw_writer: RawWriter | None = None

    def method(self, operation: Operation) -> str:
        return self.methods[operation]
