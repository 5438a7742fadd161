from __future__ import annotations

from fastapi import Depends
from pymongo.database import Database

from common.mongo.client import get_database

from ..models.order import OrderView
from ..repositories.interfaces import OrderRepositoryInterface
from ..repositories.order_repository import OrderRepository


class OrdersService:
    """내 주문 조회. 주문 생성 경로는 없고, 상태는 어드민만 바꾼다."""

    def __init__(self, order_repo: OrderRepositoryInterface) -> None:
        self._order_repo = order_repo

    def list_my_orders(self, user_id: str) -> list[OrderView]:
        return self._order_repo.list_by_user_with_product(user_id)


def get_order_repository(
    db: Database = Depends(get_database),
) -> OrderRepositoryInterface:
    """FastAPI DI용 OrderRepository 팩토리."""

    return OrderRepository(db)


def get_orders_service(
    order_repo: OrderRepositoryInterface = Depends(get_order_repository),
) -> OrdersService:
    """FastAPI DI용 OrdersService 팩토리."""

    return OrdersService(order_repo=order_repo)
