"""
Persisted entity for blog posts.

A post belongs to exactly one category through a unidirectional,
lazily loaded many-to-one relationship. Categories know nothing about
their posts.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aiblog.domain.category.entity import Category
from aiblog.shared.database import Base

TITLE_MAX_LENGTH = 200


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """A blog post."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False, index=True)
    category: Mapped[Category] = relationship(lazy="select")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def revise(self, title: str, content: str, category: Category) -> None:
        """Replace title, content and category. Clears a stale summary."""
        if content != self.content:
            self.summary = None
        self.title = title
        self.content = content
        self.category = category

    def attach_summary(self, summary: str) -> None:
        self.summary = summary

    def __repr__(self) -> str:
        return f"Post(id={self.id!r}, title={self.title!r})"
