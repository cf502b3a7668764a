"""Movable Type: category ids, trackbacks and the extended entry fields."""

from __future__ import annotations

from typing import Any, Mapping

from blogwire.core.category_cache import CategoryCache
from blogwire.core.normalizer import (
    as_flag,
    as_string_list,
    decode_text,
    pick_id,
    require_list,
    require_map,
    resolve_category_names,
    to_utc,
)
from blogwire.dialects.base import Dialect, Operation
from blogwire.dialects.blogger1 import read_dates
from blogwire.dialects.metaweblog import MetaWeblogBuilder
from blogwire.models.blog import TrackbackPing
from blogwire.models.post import Post
from blogwire.utils.logging import get_logger

logger = get_logger(__name__)


def category_assignment(names: list[str], cache: CategoryCache) -> list[dict[str, int | str]]:
    """Argument of mt.setPostCategories, primary category first.

    Names without a cached id are skipped.
    """
    assignment = []
    for name in names:
        category_id = cache.id_for(name)
        if category_id is None:
            logger.debug(f"Couldn't find categoryId for: {name}")
            continue
        assignment.append({"categoryId": int(category_id) if category_id.isdigit() else category_id})
    return assignment


def read_post_categories(payload: Any) -> list[str]:
    """Names out of an mt.getPostCategories reply."""
    entries = require_list(payload, "Could not read the result - is not a list.")
    names = []
    for entry in entries:
        info = require_map(entry, "Could not read a post category, not a map.")
        name = decode_text(info.get("categoryName"))
        if name:
            names.append(name)
    return names


def read_trackback_pings(payload: Any) -> list[TrackbackPing]:
    entries = require_list(
        payload,
        "Could not fetch list of trackback pings out of the result from the server.",
    )
    pings = []
    for entry in entries:
        info = entry if isinstance(entry, Mapping) else {}
        pings.append(
            TrackbackPing(
                title=decode_text(info.get("pingTitle")),
                url=decode_text(info.get("pingURL")),
                ip=decode_text(info.get("pingIP")),
            )
        )
    return pings


class MovableTypeBuilder(MetaWeblogBuilder):
    def post_args(self, post: Post) -> list[Any]:
        struct: dict[str, Any] = {
            "categories": list(post.categories),
            "description": post.content,
            "title": post.title,
            "mt_allow_comments": int(post.comment_allowed),
            "mt_allow_pings": int(post.trackback_allowed),
            "mt_excerpt": post.summary,
            "mt_keywords": ",".join(post.tags),
        }
        if post.additional_content:
            struct["mt_text_more"] = post.additional_content
        if post.creation_datetime is not None:
            struct["dateCreated"] = to_utc(post.creation_datetime)
        return [struct, not post.private]


class MovableTypeReader:
    def read_post(
        self, post: Post, info: Mapping[str, Any], cache: CategoryCache
    ) -> list[str]:
        read_dates(post, info)
        post.post_id = pick_id(info, "postid", "postId")
        post.title = decode_text(info.get("title"))
        post.content = decode_text(info.get("description"))
        post.additional_content = decode_text(info.get("mt_text_more"))
        post.slug = decode_text(info.get("wp_slug"))
        post.summary = decode_text(info.get("mt_excerpt"))
        post.tags = as_string_list(info.get("mt_keywords"))
        post.comment_allowed = as_flag(info.get("mt_allow_comments"))
        post.trackback_allowed = as_flag(info.get("mt_allow_pings"))
        post.link = decode_text(info.get("link"))
        post.permalink = decode_text(info.get("permaLink"))

        # publish, private or draft; servers that omit it are treated as published
        post_status = decode_text(info.get("post_status"))
        if post_status:
            post.private = post_status != "publish"

        # servers disagree on whether this holds names or ids
        categories = resolve_category_names(as_string_list(info.get("categories")), cache)
        if categories:
            post.categories = categories
        return categories


MOVABLETYPE = Dialect(
    name="movabletype",
    interface_name="Movable Type",
    methods={
        Operation.FETCH_POST: "metaWeblog.getPost",
        Operation.CREATE_POST: "metaWeblog.newPost",
        Operation.MODIFY_POST: "metaWeblog.editPost",
        Operation.RECENT_POSTS: "metaWeblog.getRecentPosts",
    },
    builder=MovableTypeBuilder(),
    reader=MovableTypeReader(),
    supports_categories=True,
    supports_media=True,
    supports_trackbacks=True,
    category_aware=True,
)
