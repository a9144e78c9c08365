"""
FastAPI router for posts.

All routes delegate to PostService. No business logic here.
Entities are mapped to response schemas inside the request, while
the session that loaded them is still open.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from aiblog.core.config import settings
from aiblog.domain.post.dependencies import get_post_service
from aiblog.domain.post.schemas import (
    PostPageResponse,
    PostRequest,
    PostResponse,
    SummarizePostRequest,
)
from aiblog.domain.post.service import PostService
from aiblog.shared.response import ApiResponse
from aiblog.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "",
    response_model=ApiResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit(settings.rate_limit_default)
def create_post(
    request: Request,
    payload: PostRequest,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[PostResponse]:
    post = service.create(payload.title, payload.content, payload.category_id)
    return ApiResponse.ok(PostResponse.from_entity(post))


@router.get(
    "",
    response_model=ApiResponse[PostPageResponse],
    summary="List posts, newest first",
)
@limiter.limit(settings.rate_limit_default)
def list_posts(
    request: Request,
    category_id: Optional[int] = Query(default=None, gt=0),
    page: int = Query(default=1, ge=1),
    size: int = Query(default=20, ge=1, le=100),
    service: PostService = Depends(get_post_service),
) -> ApiResponse[PostPageResponse]:
    result = service.list_page(page=page, size=size, category_id=category_id)
    return ApiResponse.ok(
        PostPageResponse(
            items=[PostResponse.from_entity(post) for post in result.items],
            total=result.total,
            page=result.page,
            size=result.size,
        )
    )


@router.get(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    summary="Get a post",
)
@limiter.limit(settings.rate_limit_default)
def get_post(
    request: Request,
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[PostResponse]:
    return ApiResponse.ok(PostResponse.from_entity(service.get(post_id)))


@router.put(
    "/{post_id}",
    response_model=ApiResponse[PostResponse],
    summary="Update a post",
)
@limiter.limit(settings.rate_limit_default)
def update_post(
    request: Request,
    post_id: int,
    payload: PostRequest,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[PostResponse]:
    post = service.update(post_id, payload.title, payload.content, payload.category_id)
    return ApiResponse.ok(PostResponse.from_entity(post))


@router.delete(
    "/{post_id}",
    response_model=ApiResponse[None],
    summary="Delete a post",
)
@limiter.limit(settings.rate_limit_default)
def delete_post(
    request: Request,
    post_id: int,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[None]:
    service.delete(post_id)
    return ApiResponse.ok(None)


@router.post(
    "/{post_id}/summary",
    response_model=ApiResponse[PostResponse],
    summary="Generate and store an AI summary",
)
@limiter.limit(settings.rate_limit_ai)
def summarize_post(
    request: Request,
    post_id: int,
    payload: SummarizePostRequest,
    service: PostService = Depends(get_post_service),
) -> ApiResponse[PostResponse]:
    post = service.summarize(post_id, payload.max_sentences)
    return ApiResponse.ok(PostResponse.from_entity(post))
