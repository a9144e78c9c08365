"""
Pydantic schemas for category request/response validation.

These schemas define the API contract. No business logic belongs here.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from aiblog.domain.category.entity import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class CategoryRequest(BaseModel):
    """Request schema for creating or renaming a category."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, pattern=r"\S")
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class CategoryResponse(BaseModel):
    """A category as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime
