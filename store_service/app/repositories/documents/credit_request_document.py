from __future__ import annotations

from typing import Any

from pydantic import field_validator

from common.mongo.types import (
    BaseDocument,
    MongoDateTime,
    build_document_data_from_domain,
)

from ...models.credit_request import (
    CreditRequest,
    CreditRequestStatus,
    CreditTransaction,
    PaymentMethod,
    parse_payment_method,
)


class CreditRequestDocument(BaseDocument):
    """MongoDB credit_requests 컬렉션 도큐먼트 모델."""

    user_id: str
    credits_requested: float
    amount_mmk: int
    payment_method: PaymentMethod
    payment_proof_url: str | None = None
    user_notes: str | None = None
    admin_notes: str | None = None
    status: CreditRequestStatus = CreditRequestStatus.PENDING
    resolved_by: str | None = None
    resolved_at: MongoDateTime | None = None

    @field_validator("payment_method", mode="before")
    @classmethod
    def _normalize_payment_method(cls, value: Any) -> PaymentMethod:
        # 예전에 저장된 "waypay" 도 읽을 수 있어야 한다.
        if isinstance(value, str):
            return parse_payment_method(value)
        return value

    @classmethod
    def from_domain(cls, request: CreditRequest) -> "CreditRequestDocument":
        data = build_document_data_from_domain(request)
        return cls.model_validate(data)

    def to_domain(self) -> CreditRequest:
        return CreditRequest(
            id=self.id_str,
            user_id=self.user_id,
            credits_requested=self.credits_requested,
            amount_mmk=self.amount_mmk,
            payment_method=self.payment_method,
            payment_proof_url=self.payment_proof_url,
            user_notes=self.user_notes,
            admin_notes=self.admin_notes,
            status=self.status,
            resolved_by=self.resolved_by,
            resolved_at=self.resolved_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CreditTransactionDocument(BaseDocument):
    """MongoDB credit_transactions 컬렉션 도큐먼트 모델."""

    user_id: str
    credit_request_id: str | None = None
    type: str
    amount: float
    reason: str

    @classmethod
    def from_domain(cls, tx: CreditTransaction) -> "CreditTransactionDocument":
        data = build_document_data_from_domain(tx)
        return cls.model_validate(data)

