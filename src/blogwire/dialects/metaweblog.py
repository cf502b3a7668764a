"""MetaWeblog: struct-based posts, categories and media upload."""

from __future__ import annotations

import xmlrpc.client
from typing import Any, Mapping

from blogwire.core.category_cache import CategoryCache
from blogwire.core.normalizer import (
    as_string_list,
    decode_text,
    pick_id,
    require_list,
    require_map,
    to_utc,
)
from blogwire.dialects.base import Credentials, Dialect, Operation
from blogwire.dialects.blogger1 import read_dates
from blogwire.errors import ParsingError
from blogwire.models.category import Category
from blogwire.models.media import Media
from blogwire.models.post import Post


def metaweblog_args(creds: Credentials, object_id: str = "") -> list[Any]:
    """Optional id followed by the credentials; no app key."""
    args: list[Any] = []
    if object_id:
        args.append(object_id)
    args.extend([creds.username, creds.password])
    return args


def media_args(creds: Credentials, media: Media) -> list[Any]:
    return metaweblog_args(creds, creds.blog_id) + [
        {
            "name": media.name,
            "type": media.mimetype,
            "bits": xmlrpc.client.Binary(media.data),
        }
    ]


def read_categories(payload: Any) -> list[Category]:
    """Parse metaWeblog.getCategories.

    The standard reply is a struct keyed by name; some servers (WordPress)
    send an array of structs carrying ``categoryName`` instead.
    """
    if isinstance(payload, Mapping):
        items = [(name, info) for name, info in payload.items()]
    else:
        entries = require_list(
            payload, "Could not list categories out of the result from the server."
        )
        items = []
        for entry in entries:
            info = require_map(entry, "Could not read a category, not a map.")
            items.append((decode_text(info.get("categoryName")), info))

    categories = []
    for name, info in items:
        info = info if isinstance(info, Mapping) else {}
        categories.append(
            Category(
                name=decode_text(name),
                description=decode_text(info.get("description")),
                html_url=decode_text(info.get("htmlUrl")),
                rss_url=decode_text(info.get("rssUrl")),
                category_id=decode_text(info.get("categoryId")),
                parent_id=decode_text(info.get("parentId")),
            )
        )
    return categories


def read_media_url(payload: Any) -> str:
    info = require_map(payload, "Could not read the result, not a map.")
    url = decode_text(info.get("url"))
    if not url:
        raise ParsingError("Could not read the media url out of the result.")
    return url


class MetaWeblogBuilder:
    def default_args(self, creds: Credentials, object_id: str) -> list[Any]:
        return metaweblog_args(creds, object_id)

    def post_args(self, post: Post) -> list[Any]:
        struct: dict[str, Any] = {
            "categories": list(post.categories),
            "description": post.content,
            "title": post.title,
        }
        if post.modification_datetime is not None:
            struct["lastModified"] = to_utc(post.modification_datetime)
        if post.creation_datetime is not None:
            struct["dateCreated"] = to_utc(post.creation_datetime)
        return [struct, not post.private]


class MetaWeblogReader:
    def read_post(
        self, post: Post, info: Mapping[str, Any], cache: CategoryCache
    ) -> list[str]:
        read_dates(post, info)
        post.post_id = pick_id(info, "postid", "postId")
        post.title = decode_text(info.get("title"))
        post.content = decode_text(info.get("description"))
        categories = as_string_list(info.get("categories"))
        if categories:
            post.categories = categories
        return categories


METAWEBLOG = Dialect(
    name="metaweblog",
    interface_name="MetaWeblog",
    methods={
        Operation.FETCH_POST: "metaWeblog.getPost",
        Operation.CREATE_POST: "metaWeblog.newPost",
        Operation.MODIFY_POST: "metaWeblog.editPost",
        Operation.RECENT_POSTS: "metaWeblog.getRecentPosts",
    },
    builder=MetaWeblogBuilder(),
    reader=MetaWeblogReader(),
    supports_categories=True,
    supports_media=True,
)
