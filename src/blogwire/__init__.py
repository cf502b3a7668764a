"""Asynchronous client for blog publishing APIs."""

from blogwire.client import BlogClient, GDataBlog, XmlRpcBlog
from blogwire.dialects import DIALECTS, Dialect, get_dialect
from blogwire.errors import AuthenticationError, BlogError, ErrorKind, ParsingError, TransportError
from blogwire.events import BlogListener
from blogwire.models import (
    BlogInfo,
    Category,
    Comment,
    CommentStatus,
    Media,
    MediaStatus,
    Post,
    PostStatus,
    TrackbackPing,
    UserInfo,
)
from blogwire.transport import HttpTransport, Transport

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "BlogClient",
    "BlogError",
    "BlogInfo",
    "BlogListener",
    "Category",
    "Comment",
    "CommentStatus",
    "DIALECTS",
    "Dialect",
    "ErrorKind",
    "GDataBlog",
    "HttpTransport",
    "Media",
    "MediaStatus",
    "ParsingError",
    "Post",
    "PostStatus",
    "TrackbackPing",
    "Transport",
    "TransportError",
    "UserInfo",
    "XmlRpcBlog",
    "get_dialect",
]
