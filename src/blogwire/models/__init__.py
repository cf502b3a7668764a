"""Pydantic data models."""

from blogwire.models.blog import BlogInfo, TrackbackPing, UserInfo
from blogwire.models.category import Category
from blogwire.models.comment import Comment, CommentStatus
from blogwire.models.media import Media, MediaStatus
from blogwire.models.post import Post, PostStatus

__all__ = [
    "BlogInfo",
    "Category",
    "Comment",
    "CommentStatus",
    "Media",
    "MediaStatus",
    "Post",
    "PostStatus",
    "TrackbackPing",
    "UserInfo",
]
