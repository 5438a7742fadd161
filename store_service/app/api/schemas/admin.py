from __future__ import annotations

from pydantic import BaseModel, field_validator

from ...models.admin import AdminDashboard, DashboardSummary, ResolveOutcome
from ...models.credit_request import CreditRequestWithRequester, Requester
from ...models.order import AdminOrderView, OrderStatus
from .credits import CreditRequestResponse
from .orders import OrderResponse
from .users import UserProfileResponse


class AdminCreditRequestResponse(CreditRequestResponse):
    requester: Requester | None = None

    @classmethod
    def from_view(
        cls, item: CreditRequestWithRequester
    ) -> "AdminCreditRequestResponse":
        base = CreditRequestResponse.from_domain(item.request)
        return cls(**base.model_dump(), requester=item.requester)


class AdminOrderResponse(OrderResponse):
    requester: Requester | None = None
    product_name: str | None = None

    @classmethod
    def from_view(cls, item: AdminOrderView) -> "AdminOrderResponse":
        base = OrderResponse.from_domain(item.order)
        return cls(
            **base.model_dump(),
            requester=item.requester,
            product_name=item.product_name,
        )


class AdminDashboardResponse(BaseModel):
    summary: DashboardSummary
    credit_requests: list[AdminCreditRequestResponse]
    orders: list[AdminOrderResponse]
    users: list[UserProfileResponse]

    @classmethod
    def from_domain(cls, dashboard: AdminDashboard) -> "AdminDashboardResponse":
        return cls(
            summary=dashboard.summary,
            credit_requests=[
                AdminCreditRequestResponse.from_view(item)
                for item in dashboard.credit_requests
            ],
            orders=[AdminOrderResponse.from_view(item) for item in dashboard.orders],
            users=[UserProfileResponse.from_domain(u) for u in dashboard.users],
        )


class ResolveCreditRequestBody(BaseModel):
    decision: str
    notes: str | None = None


class ResolveCreditRequestResponse(BaseModel):
    request: CreditRequestResponse
    already_resolved: bool
    credited: float

    @classmethod
    def from_domain(cls, outcome: ResolveOutcome) -> "ResolveCreditRequestResponse":
        return cls(
            request=CreditRequestResponse.from_domain(outcome.request),
            already_resolved=outcome.already_resolved,
            credited=outcome.credited,
        )


class UpdateOrderStatusBody(BaseModel):
    status: OrderStatus
    notes: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> OrderStatus:
        if isinstance(value, str):
            # 대소문자만 맞춰 준다. 예전 값(approved/denied)은 받지 않는다.
            return OrderStatus(value.strip().lower())
        return value  # type: ignore[return-value]
