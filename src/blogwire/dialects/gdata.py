"""Atom markup and feed parsing for the Google Blogger Data dialect."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from xml.etree import ElementTree
from xml.sax.saxutils import escape, quoteattr

from blogwire.core.normalizer import decode_text, parse_datetime
from blogwire.errors import AuthenticationError, ParsingError
from blogwire.models.comment import Comment
from blogwire.models.post import Post

ATOM_NS = "http://www.w3.org/2005/Atom"
BLOGGER_SCHEME = "http://www.blogger.com/atom/ns#"
ATOM_HEADERS = {"Content-Type": "application/atom+xml; charset=utf-8"}

_NS = {"atom": ATOM_NS}
_POST_ID = re.compile(r"post-(\d+)")
_BLOG_ID = re.compile(r"blog-(\d+)")
_PROFILE_ID = re.compile(r"http://www\.blogger\.com/profile/(\d+)")
_AUTH = re.compile(r"Auth=(\S+)")
_PUBLISHED = re.compile(r"<published>(.+?)</published>")
_UPDATED = re.compile(r"<updated>(.+?)</updated>")
_NS_PREFIX = re.compile(r'\sxmlns:\w+="[^"]*"|(?<=<)\w+:(?=\w)|(?<=</)\w+:(?=\w)')


@dataclass(frozen=True)
class AtomEntry:
    id: str
    title: str = ""
    content: str = ""
    link: str = ""
    summary: str = ""
    categories: list[str] = field(default_factory=list)
    published: datetime | None = None
    updated: datetime | None = None

    @property
    def post_id(self) -> str | None:
        match = _POST_ID.search(self.id)
        return match.group(1) if match else None

    @property
    def blog_id(self) -> str | None:
        match = _BLOG_ID.search(self.id)
        return match.group(1) if match else None


@dataclass(frozen=True)
class EntryReply:
    """Fields the server echoes back after a write."""

    id: str
    published: datetime | None
    updated: datetime | None


def _text(element: ElementTree.Element | None) -> str:
    if element is None:
        return ""
    if not len(element):
        return element.text or ""
    # xhtml content arrives wrapped in a div
    wrapper = element[0]
    markup = (wrapper.text or "") + "".join(
        ElementTree.tostring(child, encoding="unicode") for child in wrapper
    )
    return _NS_PREFIX.sub("", markup)


def parse_feed(payload: Any) -> list[AtomEntry]:
    """Entries of an Atom feed; ParsingError if the payload isn't one."""
    try:
        root = ElementTree.fromstring(decode_text(payload))
    except ElementTree.ParseError as exc:
        raise ParsingError(f"Could not parse the feed: {exc}") from exc
    if root.tag != f"{{{ATOM_NS}}}feed":
        raise ParsingError("The server response is not an Atom feed.")

    entries = []
    for item in root.findall("atom:entry", _NS):
        link = ""
        for candidate in item.findall("atom:link", _NS):
            if candidate.get("rel", "alternate") == "alternate":
                link = candidate.get("href", "")
                break
        entries.append(
            AtomEntry(
                id=_text(item.find("atom:id", _NS)),
                title=_text(item.find("atom:title", _NS)),
                content=_text(item.find("atom:content", _NS)),
                link=link,
                summary=_text(item.find("atom:summary", _NS)),
                categories=[
                    c.get("label") or c.get("term", "")
                    for c in item.findall("atom:category", _NS)
                ],
                published=parse_datetime(_text(item.find("atom:published", _NS))),
                updated=parse_datetime(_text(item.find("atom:updated", _NS))),
            )
        )
    return entries


def entry_to_post(entry: AtomEntry, post: Post) -> None:
    post.post_id = entry.post_id or post.post_id
    post.title = entry.title
    post.content = entry.content
    post.link = entry.link
    post.tags = list(entry.categories)
    if entry.published is not None:
        post.creation_datetime = entry.published
    if entry.updated is not None:
        post.modification_datetime = entry.updated


def entry_to_comment(entry: AtomEntry) -> Comment:
    return Comment(
        comment_id=entry.post_id or "",
        title=entry.title,
        content=entry.content,
        creation_datetime=entry.published,
        modification_datetime=entry.updated,
    )


def read_entry_reply(payload: Any) -> EntryReply:
    """Id and timestamps out of the entry the server returns after a write."""
    text = decode_text(payload)
    id_match = _POST_ID.search(text)
    if not id_match:
        raise ParsingError("Could not regexp the id out of the result.")
    published = _PUBLISHED.search(text)
    if not published:
        raise ParsingError("Could not regexp the published time out of the result.")
    updated = _UPDATED.search(text)
    if not updated:
        raise ParsingError("Could not regexp the update time out of the result.")
    return EntryReply(
        id=id_match.group(1),
        published=parse_datetime(published.group(1)),
        updated=parse_datetime(updated.group(1)),
    )


def read_profile_id(payload: Any) -> str:
    match = _PROFILE_ID.search(decode_text(payload))
    if not match:
        raise ParsingError("Could not regexp the Profile ID.")
    return match.group(1)


def read_auth_token(payload: Any) -> str:
    match = _AUTH.search(decode_text(payload))
    if not match:
        raise AuthenticationError("Authentication failed.")
    return match.group(1)


def post_entry(
    post: Post,
    *,
    username: str,
    full_name: str = "",
    blog_id: str = "",
    include_identity: bool = False,
) -> str:
    """Atom entry for creating or (with ``include_identity``) replacing a post."""
    parts = [f"<entry xmlns='{ATOM_NS}'>"]
    if include_identity:
        parts.append(f"<id>tag:blogger.com,1999:blog-{blog_id}.post-{post.post_id}</id>")
        if post.creation_datetime is not None:
            parts.append(f"<published>{post.creation_datetime.isoformat()}</published>")
        if post.modification_datetime is not None:
            parts.append(f"<updated>{post.modification_datetime.isoformat()}</updated>")
    parts.append(f"<title type='text'>{escape(post.title)}</title>")
    if post.private:
        parts.append("<app:control xmlns:app='http://purl.org/atom/app#'>")
        parts.append("<app:draft>yes</app:draft></app:control>")
    parts.append("<content type='xhtml'>")
    parts.append("<div xmlns='http://www.w3.org/1999/xhtml'>")
    parts.append(post.content)
    parts.append("</div></content>")
    for tag in post.tags:
        parts.append(f"<category scheme='{BLOGGER_SCHEME}' term={quoteattr(tag)} />")
    parts.append("<author>")
    if full_name:
        parts.append(f"<name>{escape(full_name)}</name>")
    parts.append(f"<email>{escape(username)}</email>")
    parts.append("</author>")
    parts.append("</entry>")
    return "".join(parts)


def comment_entry(comment: Comment) -> str:
    return (
        f"<entry xmlns='{ATOM_NS}'>"
        f'<title type="text">{escape(comment.title)}</title>'
        f'<content type="html">{escape(comment.content)}</content>'
        "<author>"
        f"<name>{escape(comment.name)}</name>"
        f"<email>{escape(comment.email)}</email>"
        "</author></entry>"
    )
