"""WordPress servers that reject the dates produced by the XML-RPC codec.

Create and modify are sent as literal XML with compact UTC timestamps and
the replies are scraped with regular expressions. Everything else is plain
Movable Type.
"""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

from blogwire.core.normalizer import format_compact
from blogwire.dialects.base import Credentials, Dialect, Operation, RawRequest
from blogwire.dialects.movabletype import MOVABLETYPE
from blogwire.errors import ParsingError, TransportError
from blogwire.models.post import Post

_FAULT = re.compile(r"faultString")
_STRING = re.compile(r"<string>(.+?)</string>", re.DOTALL)
_BOOLEAN = re.compile(r"<boolean>(.+?)</boolean>", re.DOTALL)

HEADERS = {
    "Content-Type": "text/xml; charset=utf-8",
}


def _cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def _string_param(value: str) -> str:
    return f"<param><value><string>{_cdata(value)}</string></value></param>"


def _member(name: str, value: str) -> str:
    return f"<member><name>{escape(name)}</name><value>{value}</value></member>"


def _string_member(name: str, value: str) -> str:
    return _member(name, f"<string>{_cdata(value)}</string>")


def _date_member(name: str, value: str) -> str:
    return _member(name, f"<dateTime.iso8601>{value}</dateTime.iso8601>")


class WordpressRawWriter:
    """Builds metaWeblog.newPost/editPost requests by hand."""

    def build(self, creds: Credentials, post: Post, operation: Operation) -> RawRequest:
        if operation is Operation.CREATE_POST:
            method, object_id = "metaWeblog.newPost", creds.blog_id
        elif operation is Operation.MODIFY_POST:
            method, object_id = "metaWeblog.editPost", post.post_id
        else:
            raise ValueError(f"No raw request for {operation.value}")

        members = [
            _string_member("description", post.content),
            _string_member("title", post.title),
        ]
        if operation is Operation.MODIFY_POST and post.modification_datetime is not None:
            members.append(_date_member("lastModified", format_compact(post.modification_datetime)))
        if post.creation_datetime is not None:
            members.append(_date_member("dateCreated", format_compact(post.creation_datetime)))
        members.append(_member("mt_allow_comments", f"<int>{int(post.comment_allowed)}</int>"))
        members.append(_member("mt_allow_pings", f"<int>{int(post.trackback_allowed)}</int>"))
        if post.additional_content:
            members.append(_string_member("mt_text_more", post.additional_content))
        members.append(_string_member("wp_slug", post.slug))
        members.append(_string_member("mt_excerpt", post.summary))
        members.append(_string_member("mt_keywords", ",".join(post.tags)))

        markup = (
            '<?xml version="1.0"?>'
            "<methodCall>"
            f"<methodName>{method}</methodName>"
            "<params>"
            + _string_param(object_id)
            + _string_param(creds.username)
            + _string_param(creds.password)
            + "<param><value><struct>" + "".join(members) + "</struct></value></param>"
            + f"<param><value><boolean>{int(not post.private)}</boolean></value></param>"
            "</params></methodCall>"
        )
        return RawRequest(body=markup.encode("utf-8"), headers=HEADERS)

    def read_reply(self, text: str, operation: Operation) -> str | bool:
        """Post id for a create, True for a successful modify."""
        if _FAULT.search(text):
            match = _STRING.search(text)
            message = match.group(1) if match else "The server returned a fault."
            raise TransportError(message, operation=operation.value)

        if operation is Operation.CREATE_POST:
            match = _STRING.search(text)
            if not match:
                raise ParsingError("Could not regexp the id out of the result.")
            return match.group(1).strip()

        match = _BOOLEAN.search(text)
        if not match:
            raise ParsingError("Could not regexp the id out of the result.")
        if match.group(1).strip() != "1":
            raise TransportError("The server did not confirm the update.", operation=operation.value)
        return True


WORDPRESS_BUGGY = Dialect(
    name="wordpressbuggy",
    interface_name="Movable Type",
    methods=MOVABLETYPE.methods,
    builder=MOVABLETYPE.builder,
    reader=MOVABLETYPE.reader,
    supports_categories=True,
    supports_media=True,
    supports_trackbacks=True,
    category_aware=True,
    raw_writer=WordpressRawWriter(),
)
