from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.credit_request import CreditRequest
from ...models.pricing import CreditPackage, PaymentMethodInfo


def proof_path(request_id: str | None) -> str | None:
    """저장된 증빙을 어드민이 내려받는 API 경로."""

    if not request_id:
        return None
    return f"/api/v1/admin/credit-requests/{request_id}/proof"


class CreditOptionsResponse(BaseModel):
    credit_rate_mmk: int
    packages: list[CreditPackage]
    payment_methods: list[PaymentMethodInfo]


class CreditRequestResponse(BaseModel):
    id: str | None
    user_id: str
    credits_requested: float
    amount_mmk: int
    payment_method: str
    proof_url: str | None = None
    user_notes: str | None = None
    admin_notes: str | None = None
    status: str
    resolved_by: str | None = None
    resolved_at: UtcDateTime | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, request: CreditRequest) -> "CreditRequestResponse":
        return cls(
            id=request.id,
            user_id=request.user_id,
            credits_requested=request.credits_requested,
            amount_mmk=request.amount_mmk,
            payment_method=request.payment_method.value,
            proof_url=proof_path(request.id) if request.payment_proof_url else None,
            user_notes=request.user_notes,
            admin_notes=request.admin_notes,
            status=request.status.value,
            resolved_by=request.resolved_by,
            resolved_at=request.resolved_at,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class CreditRequestCreatedResponse(BaseModel):
    request: CreditRequestResponse
    message: str = (
        "Your credit request has been submitted and is pending admin approval."
    )


class ListCreditRequestsResponse(BaseModel):
    total: int
    items: list[CreditRequestResponse]
