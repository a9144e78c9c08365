"""
FastAPI router for categories.

All routes delegate to CategoryService. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from fastapi import APIRouter, Depends, Request, status

from aiblog.core.config import settings
from aiblog.domain.category.dependencies import get_category_service
from aiblog.domain.category.schemas import CategoryRequest, CategoryResponse
from aiblog.domain.category.service import CategoryService
from aiblog.shared.response import ApiResponse
from aiblog.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=ApiResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
@limiter.limit(settings.rate_limit_default)
def create_category(
    request: Request,
    payload: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = service.create(payload.name, payload.description)
    return ApiResponse.ok(CategoryResponse.model_validate(category))


@router.get(
    "",
    response_model=ApiResponse[list[CategoryResponse]],
    summary="List categories",
)
@limiter.limit(settings.rate_limit_default)
def list_categories(
    request: Request,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[list[CategoryResponse]]:
    categories = service.list_all()
    return ApiResponse.ok([CategoryResponse.model_validate(category) for category in categories])


@router.get(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Get a category",
)
@limiter.limit(settings.rate_limit_default)
def get_category(
    request: Request,
    category_id: int,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    return ApiResponse.ok(CategoryResponse.model_validate(service.get(category_id)))


@router.put(
    "/{category_id}",
    response_model=ApiResponse[CategoryResponse],
    summary="Rename a category",
)
@limiter.limit(settings.rate_limit_default)
def rename_category(
    request: Request,
    category_id: int,
    payload: CategoryRequest,
    service: CategoryService = Depends(get_category_service),
) -> ApiResponse[CategoryResponse]:
    category = service.rename(category_id, payload.name, payload.description)
    return ApiResponse.ok(CategoryResponse.model_validate(category))
