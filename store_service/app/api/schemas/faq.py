from __future__ import annotations

from pydantic import BaseModel

from ...services.faq_service import FaqEntry


class FaqResponse(BaseModel):
    title: str = "Frequently Asked Questions"
    items: list[FaqEntry]
