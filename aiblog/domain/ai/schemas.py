"""
Pydantic schemas for AI request/response validation.
"""

from pydantic import BaseModel, Field

CONTENT_MAX_LENGTH = 20_000


class SummaryRequest(BaseModel):
    """Request schema for summarizing content."""

    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH, pattern=r"\S")
    max_sentences: int = Field(default=3, ge=1, le=10)


class SummaryResponse(BaseModel):
    summary: str


class TitleSuggestionRequest(BaseModel):
    """Request schema for title suggestions."""

    content: str = Field(..., min_length=1, max_length=CONTENT_MAX_LENGTH, pattern=r"\S")
    count: int = Field(default=3, ge=1, le=10)


class TitleSuggestionResponse(BaseModel):
    titles: list[str]
