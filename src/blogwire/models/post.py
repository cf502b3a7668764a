"""Blog post model shared by every dialect."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PostStatus(str, Enum):
    """Lifecycle of a post as seen by the caller."""

    NEW = "new"
    FETCHED = "fetched"
    CREATED = "created"
    MODIFIED = "modified"
    REMOVED = "removed"
    ERROR = "error"


class Post(BaseModel):
    """A blog post.

    The caller owns every instance. Adapters keep a reference only while a call
    concerning the post is pending and write the results back into it.
    """

    post_id: str = Field(default="", description="Server-assigned id, empty until created")
    title: str = ""
    content: str = ""
    additional_content: str = Field(
        default="", description="Extended entry body (mt_text_more)"
    )
    slug: str = ""
    categories: list[str] = Field(
        default_factory=list, description="Category names, the first is the primary one"
    )
    tags: list[str] = Field(default_factory=list)
    summary: str = ""
    comment_allowed: bool = True
    trackback_allowed: bool = True
    private: bool = False
    creation_datetime: datetime | None = None
    modification_datetime: datetime | None = None
    link: str = ""
    permalink: str = ""
    status: PostStatus = PostStatus.NEW
    error: str = ""

    @property
    def is_new(self) -> bool:
        """True if the server has not assigned an id yet."""
        return not self.post_id

    def mark_error(self, message: str) -> None:
        self.error = message
        self.status = PostStatus.ERROR
