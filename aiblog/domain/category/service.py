"""
Category business rules.

Input: category names and descriptions from the controller.
Output: Category entities.
Failure cases: CATEGORY_NOT_FOUND, DUPLICATE_CATEGORY_NAME.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from aiblog.domain.category.entity import Category
from aiblog.domain.category.repository import CategoryRepository
from aiblog.shared.errors import BusinessError, ErrorCode

logger = logging.getLogger(__name__)


class CategoryService:
    """Creates, renames and looks up categories."""

    def __init__(self, category_repository: CategoryRepository) -> None:
        self._categories = category_repository

    def create(self, name: str, description: Optional[str] = None) -> Category:
        """Create a category with a unique name.

        Raises:
            BusinessError: DUPLICATE_CATEGORY_NAME if the name is taken.
        """
        name = name.strip()
        if self._categories.exists_by_name(name):
            raise BusinessError(ErrorCode.DUPLICATE_CATEGORY_NAME, detail=f"name={name!r}")

        try:
            category = self._categories.save(Category(name=name, description=description))
        except IntegrityError as exc:
            raise BusinessError(ErrorCode.DUPLICATE_CATEGORY_NAME, detail=f"name={name!r}") from exc

        logger.info("Created category id=%s name=%s", category.id, category.name)
        return category

    def get(self, category_id: int) -> Category:
        """Return a category or raise CATEGORY_NOT_FOUND."""
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise BusinessError(ErrorCode.CATEGORY_NOT_FOUND, detail=f"id={category_id}")
        return category

    def list_all(self) -> list[Category]:
        return self._categories.find_all()

    def rename(self, category_id: int, name: str, description: Optional[str] = None) -> Category:
        """Rename a category, keeping names unique."""
        category = self.get(category_id)
        name = name.strip()
        existing = self._categories.find_by_name(name)
        if existing is not None and existing.id != category.id:
            raise BusinessError(ErrorCode.DUPLICATE_CATEGORY_NAME, detail=f"name={name!r}")

        category.rename(name, description)
        try:
            self._categories.save(category)
        except IntegrityError as exc:
            raise BusinessError(ErrorCode.DUPLICATE_CATEGORY_NAME, detail=f"name={name!r}") from exc

        logger.info("Renamed category id=%s to %s", category.id, category.name)
        return category
