from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.order import Order, OrderProduct, OrderView


class OrderResponse(BaseModel):
    id: str | None
    user_id: str
    product_id: str
    phone_number: str
    price_credits: float
    status: str
    admin_notes: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, order: Order) -> "OrderResponse":
        return cls(
            id=order.id,
            user_id=order.user_id,
            product_id=order.product_id,
            phone_number=order.phone_number,
            price_credits=order.price_credits,
            status=order.status.value,
            admin_notes=order.admin_notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class MyOrderResponse(OrderResponse):
    product: OrderProduct | None = None

    @classmethod
    def from_view(cls, view: OrderView) -> "MyOrderResponse":
        base = OrderResponse.from_domain(view.order)
        return cls(**base.model_dump(), product=view.product)


class MyOrdersResponse(BaseModel):
    total: int
    items: list[MyOrderResponse]
