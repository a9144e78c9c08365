"""
Dependency injection for the category domain.

Wires the request-scoped session into the repository and service.
Controllers depend on these providers, never on repositories directly.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from aiblog.domain.category.repository import CategoryRepository
from aiblog.domain.category.service import CategoryService
from aiblog.shared.database import get_session


def get_category_service(session: Session = Depends(get_session)) -> CategoryService:
    """Build CategoryService with its data-access dependencies."""
    return CategoryService(category_repository=CategoryRepository(session))
