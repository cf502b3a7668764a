"""Category model for organizing blog content."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Category(BaseModel):
    """A category as reported by the server."""

    name: str = Field(..., description="Human-readable category name")
    description: str = Field(default="", description="Optional category description")
    html_url: str = ""
    rss_url: str = ""
    category_id: str = Field(default="", description="Server-side category id")
    parent_id: str = ""
