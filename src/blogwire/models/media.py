"""Media upload model."""

from enum import Enum

from pydantic import BaseModel, Field


class MediaStatus(str, Enum):
    NEW = "new"
    CREATED = "created"
    ERROR = "error"


class Media(BaseModel):
    """A file uploaded to the blog. The server sets ``url`` on success."""

    name: str
    mimetype: str = "application/octet-stream"
    data: bytes = b""
    url: str = ""
    status: MediaStatus = MediaStatus.NEW
    error: str = ""

    def mark_error(self, message: str) -> None:
        self.error = message
        self.status = MediaStatus.ERROR
