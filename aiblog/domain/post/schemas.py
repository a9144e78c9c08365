"""
Pydantic schemas for post request/response validation.

These schemas define the API contract. No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from aiblog.domain.post.entity import TITLE_MAX_LENGTH


class PostRequest(BaseModel):
    """Request schema for creating or updating a post."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, pattern=r"\S")
    content: str = Field(..., min_length=1, pattern=r"\S")
    category_id: int = Field(..., gt=0)


class SummarizePostRequest(BaseModel):
    max_sentences: int = Field(default=3, ge=1, le=10)


class PostResponse(BaseModel):
    """A post as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    summary: Optional[str] = None
    category_id: int
    category_name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, post) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            summary=post.summary,
            category_id=post.category_id,
            category_name=post.category.name,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostPageResponse(BaseModel):
    items: list[PostResponse]
    total: int
    page: int
    size: int
