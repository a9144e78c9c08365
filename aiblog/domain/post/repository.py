"""
Repository for Post entities.

Thin data-access layer over a SQLAlchemy session. Transaction
boundaries belong to the caller (the request-scoped session).
"""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from aiblog.domain.post.entity import Post


class PostRepository:
    """Persists and queries posts, newest first."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def save(self, post: Post) -> Post:
        self._session.add(post)
        self._session.flush()
        return post

    def find_by_id(self, post_id: int) -> Optional[Post]:
        return self._session.get(Post, post_id)

    def find_page(self, offset: int, limit: int, category_id: Optional[int] = None) -> list[Post]:
        statement = select(Post).order_by(Post.created_at.desc(), Post.id.desc())
        if category_id is not None:
            statement = statement.where(Post.category_id == category_id)
        return list(self._session.scalars(statement.offset(offset).limit(limit)))

    def count(self, category_id: Optional[int] = None) -> int:
        statement = select(func.count()).select_from(Post)
        if category_id is not None:
            statement = statement.where(Post.category_id == category_id)
        return self._session.scalar(statement) or 0

    def delete(self, post: Post) -> None:
        self._session.delete(post)
        self._session.flush()
