from __future__ import annotations

from pydantic import BaseModel

from common.models.user import User

from .credit_request import CreditRequest, CreditRequestWithRequester
from .order import AdminOrderView


class DashboardSummary(BaseModel):
    pending_credit_requests: int
    pending_orders: int
    total_users: int


class AdminDashboard(BaseModel):
    """어드민 화면의 세 목록과 요약. 각 목록은 최신순이다."""

    credit_requests: list[CreditRequestWithRequester]
    orders: list[AdminOrderView]
    users: list[User]
    summary: DashboardSummary


class ResolveOutcome(BaseModel):
    request: CreditRequest
    already_resolved: bool
    credited: float = 0.0
