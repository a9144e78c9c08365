"""
Dependency injection for the post domain.

Wires the request-scoped session and the AI service into PostService.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from aiblog.domain.ai.dependencies import get_ai_service
from aiblog.domain.ai.service import AiService
from aiblog.domain.category.repository import CategoryRepository
from aiblog.domain.post.repository import PostRepository
from aiblog.domain.post.service import PostService
from aiblog.shared.database import get_session


def get_post_service(
    session: Session = Depends(get_session),
    ai_service: AiService = Depends(get_ai_service),
) -> PostService:
    """Build PostService with its data-access and AI dependencies."""
    return PostService(
        post_repository=PostRepository(session),
        category_repository=CategoryRepository(session),
        ai_service=ai_service,
    )
