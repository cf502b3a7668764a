"""Blogger 1.0: titles and categories travel inside the post body."""

from __future__ import annotations

from typing import Any, Mapping

from blogwire.core.category_cache import CategoryCache
from blogwire.core.normalizer import (
    decode_text,
    embed_markup,
    extract_embedded_markup,
    parse_datetime,
    pick_id,
)
from blogwire.dialects.base import Credentials, Dialect, Operation
from blogwire.models.post import Post


def blogger1_args(creds: Credentials, object_id: str = "") -> list[Any]:
    """Arguments of every blogger.* call: app key, optional id, credentials."""
    args: list[Any] = [creds.app_key]
    if object_id:
        args.append(object_id)
    args.extend([creds.username, creds.password])
    return args


def read_dates(post: Post, info: Mapping[str, Any]) -> None:
    """Apply dateCreated/lastModified, skipping absent or invalid values."""
    created = parse_datetime(info.get("dateCreated"))
    if created is not None:
        post.creation_datetime = created
    modified = parse_datetime(info.get("lastModified"))
    if modified is not None:
        post.modification_datetime = modified


class Blogger1Builder:
    def default_args(self, creds: Credentials, object_id: str) -> list[Any]:
        return blogger1_args(creds, object_id)

    def post_args(self, post: Post) -> list[Any]:
        return [embed_markup(post.title, post.categories, post.content), not post.private]


class Blogger1Reader:
    def read_post(
        self, post: Post, info: Mapping[str, Any], cache: CategoryCache
    ) -> list[str]:
        read_dates(post, info)
        post.post_id = pick_id(info, "postid", "postId")

        embedded = extract_embedded_markup(decode_text(info.get("content")))
        post.title = embedded.title if embedded.title is not None else decode_text(info.get("title"))
        post.content = embedded.content
        if embedded.categories:
            post.categories = embedded.categories
        return embedded.categories


BLOGGER1 = Dialect(
    name="blogger1",
    interface_name="Blogger 1.0",
    methods={
        Operation.FETCH_POST: "blogger.getPost",
        Operation.CREATE_POST: "blogger.newPost",
        Operation.MODIFY_POST: "blogger.editPost",
        Operation.RECENT_POSTS: "blogger.getRecentPosts",
    },
    builder=Blogger1Builder(),
    reader=Blogger1Reader(),
)
