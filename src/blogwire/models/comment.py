"""Comment model (GData dialect)."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class CommentStatus(str, Enum):
    NEW = "new"
    FETCHED = "fetched"
    CREATED = "created"
    REMOVED = "removed"
    ERROR = "error"


class Comment(BaseModel):
    """A comment attached to a post."""

    comment_id: str = ""
    title: str = ""
    content: str = ""
    name: str = Field(default="", description="Author name")
    email: str = Field(default="", description="Author email")
    url: str = Field(default="", description="Author homepage")
    creation_datetime: datetime | None = None
    modification_datetime: datetime | None = None
    status: CommentStatus = CommentStatus.NEW
    error: str = ""

    def mark_error(self, message: str) -> None:
        self.error = message
        self.status = CommentStatus.ERROR
