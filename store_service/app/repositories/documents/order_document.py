from __future__ import annotations

from typing import Any

from pydantic import field_validator

from common.mongo.types import BaseDocument, PyObjectId

from ...models.order import Order, OrderStatus, normalize_order_status


class OrderDocument(BaseDocument):
    """MongoDB orders 컬렉션 도큐먼트 모델.

    status 는 읽는 시점에 기준 집합으로 마이그레이션된다 (approved→processing, denied→failed).
    """

    user_id: str
    product_id: PyObjectId
    phone_number: str
    price_credits: float
    status: OrderStatus = OrderStatus.PENDING
    admin_notes: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _migrate_status(cls, value: Any) -> OrderStatus:
        return normalize_order_status(value)

    def to_domain(self) -> Order:
        return Order(
            id=self.id_str,
            user_id=self.user_id,
            product_id=str(self.product_id),
            phone_number=self.phone_number,
            price_credits=self.price_credits,
            status=self.status,
            admin_notes=self.admin_notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
