from __future__ import annotations

from fastapi import APIRouter

from ...services.faq_service import list_faq
from ..schemas.faq import FaqResponse

router = APIRouter()


@router.get("", response_model=FaqResponse, summary="자주 묻는 질문")
async def get_faq() -> FaqResponse:
    return FaqResponse(items=list_faq())
