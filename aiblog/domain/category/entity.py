"""
Persisted entity for blog categories.

State changes go through intent-revealing methods; no setters.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from aiblog.shared.database import Base

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """A blog category. Names are unique."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    def rename(self, name: str, description: Optional[str] = None) -> None:
        self.name = name
        self.description = description

    def __repr__(self) -> str:
        return f"Category(id={self.id!r}, name={self.name!r})"
