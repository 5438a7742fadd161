"""크레딧 충전 요청 도메인 모델.

유저가 KPay/WavePay 로 송금한 뒤 증빙과 함께 요청을 올리면 pending 으로 생성되고,
어드민이 approved / denied 로 한 번만 처리한다. 처리된 상태는 최종 상태다.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, model_validator

from common.models.utils import normalize_id_fields_to_str


class CreditRequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class PaymentMethod(StrEnum):
    KPAY = "kpay"
    WAVEPAY = "wavepay"


# 예전 화면에서 쓰던 철자
_PAYMENT_METHOD_ALIASES = {"waypay": PaymentMethod.WAVEPAY}

# 거절을 rejected 로 보내는 클라이언트도 받아 준다.
_DECISION_ALIASES = {"rejected": CreditRequestStatus.DENIED}


def parse_payment_method(value: str) -> PaymentMethod:
    """결제수단 문자열을 정규화한다. 알 수 없는 값이면 ValueError."""

    normalized = value.strip().lower()
    if normalized in _PAYMENT_METHOD_ALIASES:
        return _PAYMENT_METHOD_ALIASES[normalized]
    return PaymentMethod(normalized)


def parse_decision(value: str) -> CreditRequestStatus:
    """어드민 처리 결정을 approved / denied 로 정규화한다."""

    normalized = value.strip().lower()
    status = _DECISION_ALIASES.get(normalized) or CreditRequestStatus(normalized)
    if status == CreditRequestStatus.PENDING:
        raise ValueError("decision must be approved or denied")
    return status


class CreditRequest(BaseModel):
    id: str | None = None
    user_id: str
    credits_requested: float
    amount_mmk: int
    payment_method: PaymentMethod
    payment_proof_url: str | None = None
    user_notes: str | None = None
    admin_notes: str | None = None
    status: CreditRequestStatus = CreditRequestStatus.PENDING
    resolved_by: str | None = None
    resolved_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id"])

    @property
    def is_pending(self) -> bool:
        return self.status == CreditRequestStatus.PENDING


class Requester(BaseModel):
    name: str
    email: str


class CreditRequestWithRequester(BaseModel):
    """어드민 목록용. 요청자 이름/이메일이 조인된다 (유저가 없으면 None)."""

    request: CreditRequest
    requester: Requester | None = None


class ResolveResult(BaseModel):
    """어드민 처리 결과.

    - changed: 이번 호출로 pending 에서 전이되었는지
    - credited: 이번 호출로 잔액에 더해진 크레딧 (거절/재시도는 0)
    """

    request: CreditRequest
    changed: bool
    credited: float = 0.0


class CreditTransaction(BaseModel):
    """잔액 변경 원장. credit_request_id 는 컬렉션 내에서 유일하다."""

    id: str | None = None
    user_id: str
    credit_request_id: str | None = None
    type: str  # "credit_request_approved"
    amount: float
    reason: str
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id"])
