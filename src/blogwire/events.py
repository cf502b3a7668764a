"""Callbacks an adapter invokes when an operation finishes.

Subclass :class:`BlogListener` and override the events you care about. Each
public operation ends with exactly one success event or one error event.
"""

from __future__ import annotations

from blogwire.errors import ErrorKind
from blogwire.models import (
    BlogInfo,
    Category,
    Comment,
    Media,
    Post,
    TrackbackPing,
    UserInfo,
)


class BlogListener:
    """No-op base listener."""

    # Account discovery
    def fetched_user_info(self, info: UserInfo) -> None:
        pass

    def listed_blogs(self, blogs: list[BlogInfo]) -> None:
        pass

    def fetched_profile_id(self, profile_id: str) -> None:
        pass

    # Posts
    def listed_recent_posts(self, posts: list[Post]) -> None:
        pass

    def fetched_post(self, post: Post) -> None:
        pass

    def created_post(self, post: Post) -> None:
        pass

    def modified_post(self, post: Post) -> None:
        pass

    def removed_post(self, post: Post) -> None:
        pass

    # Categories and trackbacks
    def listed_categories(self, categories: list[Category]) -> None:
        pass

    def listed_trackback_pings(self, post: Post, pings: list[TrackbackPing]) -> None:
        pass

    # Media
    def created_media(self, media: Media) -> None:
        pass

    # Comments
    def listed_comments(self, post: Post, comments: list[Comment]) -> None:
        pass

    def listed_all_comments(self, comments: list[Comment]) -> None:
        pass

    def created_comment(self, post: Post, comment: Comment) -> None:
        pass

    def removed_comment(self, post: Post, comment: Comment) -> None:
        pass

    # Errors
    def error(self, kind: ErrorKind, message: str) -> None:
        pass

    def error_post(self, kind: ErrorKind, message: str, post: Post) -> None:
        pass

    def error_media(self, kind: ErrorKind, message: str, media: Media) -> None:
        pass

    def error_comment(
        self, kind: ErrorKind, message: str, post: Post, comment: Comment
    ) -> None:
        pass
