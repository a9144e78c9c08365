"""
Post business rules.

Input: post fields and identifiers from the controller.
Output: Post entities and pages of posts.
Failure cases: POST_NOT_FOUND, CATEGORY_NOT_FOUND, and the AI error
kinds when a summary is generated.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from aiblog.domain.ai.service import AiService
from aiblog.domain.category.entity import Category
from aiblog.domain.category.repository import CategoryRepository
from aiblog.domain.post.entity import Post
from aiblog.domain.post.repository import PostRepository
from aiblog.shared.errors import BusinessError, ErrorCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostPage:
    items: list[Post]
    total: int
    page: int
    size: int


class PostService:
    """Writes, reads and summarizes posts."""

    def __init__(
        self,
        post_repository: PostRepository,
        category_repository: CategoryRepository,
        ai_service: AiService,
    ) -> None:
        self._posts = post_repository
        self._categories = category_repository
        self._ai = ai_service

    def _category(self, category_id: int) -> Category:
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise BusinessError(ErrorCode.CATEGORY_NOT_FOUND, detail=f"id={category_id}")
        return category

    def create(self, title: str, content: str, category_id: int) -> Post:
        """Create a post in an existing category."""
        category = self._category(category_id)
        post = self._posts.save(Post(title=title.strip(), content=content, category=category))
        logger.info("Created post id=%s category=%s", post.id, category.id)
        return post

    def get(self, post_id: int) -> Post:
        """Return a post or raise POST_NOT_FOUND."""
        post = self._posts.find_by_id(post_id)
        if post is None:
            raise BusinessError(ErrorCode.POST_NOT_FOUND, detail=f"id={post_id}")
        return post

    def list_page(self, page: int = 1, size: int = 20, category_id: Optional[int] = None) -> PostPage:
        """Return one page of posts, newest first, optionally within a category."""
        if category_id is not None:
            self._category(category_id)
        offset = (page - 1) * size
        items = self._posts.find_page(offset=offset, limit=size, category_id=category_id)
        total = self._posts.count(category_id=category_id)
        return PostPage(items=items, total=total, page=page, size=size)

    def update(self, post_id: int, title: str, content: str, category_id: int) -> Post:
        post = self.get(post_id)
        category = self._category(category_id)
        post.revise(title.strip(), content, category)
        self._posts.save(post)
        logger.info("Updated post id=%s", post.id)
        return post

    def delete(self, post_id: int) -> None:
        post = self.get(post_id)
        self._posts.delete(post)
        logger.info("Deleted post id=%s", post_id)

    def summarize(self, post_id: int, max_sentences: int = 3) -> Post:
        """Generate and store an AI summary for a post."""
        post = self.get(post_id)
        post.attach_summary(self._ai.summarize(post.content, max_sentences))
        self._posts.save(post)
        logger.info("Stored AI summary for post id=%s", post.id)
        return post
