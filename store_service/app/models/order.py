from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from common.models.utils import normalize_id_fields_to_str

from .catalog import CategorySummary, OperatorSummary
from .credit_request import Requester


class OrderStatus(StrEnum):
    """주문 상태의 기준 집합. Pending → Processing → Completed (또는 Failed)."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


# 이전 스키마에 저장된 값은 읽을 때 기준 집합으로 옮긴다.
_LEGACY_ORDER_STATUS = {
    "approved": OrderStatus.PROCESSING,
    "denied": OrderStatus.FAILED,
}


def normalize_order_status(value: Any) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    text = str(value).strip().lower()
    return _LEGACY_ORDER_STATUS.get(text) or OrderStatus(text)


class Order(BaseModel):
    id: str | None = None
    user_id: str
    product_id: str
    phone_number: str
    price_credits: float
    status: OrderStatus = OrderStatus.PENDING
    admin_notes: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id", "product_id"])

    @field_validator("status", mode="before")
    @classmethod
    def _migrate_status(cls, value: Any) -> OrderStatus:
        return normalize_order_status(value)


class OrderProduct(BaseModel):
    name: str
    description: str | None = None
    operator: OperatorSummary | None = None
    category: CategorySummary | None = None


class OrderView(BaseModel):
    """내 주문 목록용. 상품/통신사/카테고리가 조인된다."""

    order: Order
    product: OrderProduct | None = None


class AdminOrderView(BaseModel):
    """어드민 목록용. 주문자와 상품명이 조인된다."""

    order: Order
    requester: Requester | None = None
    product_name: str | None = None
