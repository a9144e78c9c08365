"""
Repository for Category entities.

Thin data-access layer over a SQLAlchemy session. Transaction
boundaries belong to the caller (the request-scoped session).
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from aiblog.domain.category.entity import Category


class CategoryRepository:
    """Persists and queries categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, category: Category) -> Category:
        """Add the category and flush so constraint violations surface here."""
        self._session.add(category)
        self._session.flush()
        return category

    def find_by_id(self, category_id: int) -> Optional[Category]:
        return self._session.get(Category, category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        statement = select(Category).where(func.lower(Category.name) == name.lower())
        return self._session.scalars(statement).first()

    def exists_by_name(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def find_all(self) -> list[Category]:
        return list(self._session.scalars(select(Category).order_by(Category.name)))
