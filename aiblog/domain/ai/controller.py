"""
FastAPI router for AI writing assistance.

All routes delegate to AiService. No business logic here.
Provider failures surface as BusinessError and are mapped centrally.
"""

from fastapi import APIRouter, Depends, Request

from aiblog.core.config import settings
from aiblog.domain.ai.dependencies import get_ai_service
from aiblog.domain.ai.schemas import (
    SummaryRequest,
    SummaryResponse,
    TitleSuggestionRequest,
    TitleSuggestionResponse,
)
from aiblog.domain.ai.service import AiService
from aiblog.shared.response import ApiResponse
from aiblog.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post(
    "/summaries",
    response_model=ApiResponse[SummaryResponse],
    summary="Summarize content",
)
@limiter.limit(settings.rate_limit_ai)
def summarize(
    request: Request,
    payload: SummaryRequest,
    service: AiService = Depends(get_ai_service),
) -> ApiResponse[SummaryResponse]:
    summary = service.summarize(payload.content, payload.max_sentences)
    return ApiResponse.ok(SummaryResponse(summary=summary))


@router.post(
    "/titles",
    response_model=ApiResponse[TitleSuggestionResponse],
    summary="Suggest post titles",
)
@limiter.limit(settings.rate_limit_ai)
def suggest_titles(
    request: Request,
    payload: TitleSuggestionRequest,
    service: AiService = Depends(get_ai_service),
) -> ApiResponse[TitleSuggestionResponse]:
    titles = service.suggest_titles(payload.content, payload.count)
    return ApiResponse.ok(TitleSuggestionResponse(titles=titles))
