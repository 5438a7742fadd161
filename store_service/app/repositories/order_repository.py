from __future__ import annotations

from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database

from common.mongo.types import try_object_id

from ..models.catalog import CategorySummary, OperatorSummary
from ..models.credit_request import Requester
from ..models.order import (
    AdminOrderView,
    Order,
    OrderProduct,
    OrderStatus,
    OrderView,
)
from .documents.order_document import OrderDocument
from .interfaces import OrderRepositoryInterface


def _first(docs: list[dict] | None) -> dict | None:
    if not docs:
        return None
    return docs[0]


class OrderRepository(OrderRepositoryInterface):
    """orders 컬렉션에 대한 MongoDB 접근 레이어.

    상품/통신사/카테고리/주문자 정보는 $lookup 으로 한 번에 붙여서 읽는다.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["orders"]

    @staticmethod
    def _from_document(doc: dict) -> Order:
        return OrderDocument.model_validate(doc).to_domain()

    def list_by_user_with_product(self, user_id: str) -> list[OrderView]:
        pipeline = [
            {"$match": {"user_id": user_id}},
            {"$sort": {"created_at": -1, "_id": -1}},
            {
                "$lookup": {
                    "from": "products",
                    "localField": "product_id",
                    "foreignField": "_id",
                    "as": "product",
                }
            },
            {"$unwind": {"path": "$product", "preserveNullAndEmptyArrays": True}},
            {
                "$lookup": {
                    "from": "operators",
                    "localField": "product.operator",
                    "foreignField": "name",
                    "as": "operator",
                }
            },
            {
                "$lookup": {
                    "from": "categories",
                    "localField": "product.category",
                    "foreignField": "name",
                    "as": "category",
                }
            },
        ]

        views: list[OrderView] = []
        for doc in self._col.aggregate(pipeline):
            product_doc = doc.pop("product", None)
            operator_doc = _first(doc.pop("operator", None))
            category_doc = _first(doc.pop("category", None))

            product = None
            if product_doc:
                product = OrderProduct(
                    name=product_doc.get("name", ""),
                    description=product_doc.get("description"),
                    operator=(
                        OperatorSummary.model_validate(operator_doc)
                        if operator_doc
                        else None
                    ),
                    category=(
                        CategorySummary.model_validate(category_doc)
                        if category_doc
                        else None
                    ),
                )
            views.append(OrderView(order=self._from_document(doc), product=product))
        return views

    def list_for_admin(self) -> list[AdminOrderView]:
        pipeline = [
            {"$sort": {"created_at": -1, "_id": -1}},
            {
                "$lookup": {
                    "from": "users",
                    "localField": "user_id",
                    "foreignField": "user_id",
                    "as": "requester",
                }
            },
            {
                "$lookup": {
                    "from": "products",
                    "localField": "product_id",
                    "foreignField": "_id",
                    "as": "product",
                }
            },
        ]

        views: list[AdminOrderView] = []
        for doc in self._col.aggregate(pipeline):
            requester_doc = _first(doc.pop("requester", None))
            product_doc = _first(doc.pop("product", None))

            requester = None
            if requester_doc:
                requester = Requester(
                    name=requester_doc.get("name", ""),
                    email=requester_doc.get("email", ""),
                )
            views.append(
                AdminOrderView(
                    order=self._from_document(doc),
                    requester=requester,
                    product_name=product_doc.get("name") if product_doc else None,
                )
            )
        return views

    def update_status(
        self, order_id: str, status: OrderStatus, admin_notes: str | None
    ) -> Order | None:
        oid = try_object_id(order_id)
        if oid is None:
            return None

        doc = self._col.find_one_and_update(
            {"_id": oid},
            {
                "$set": {
                    "status": status.value,
                    "admin_notes": admin_notes,
                    "updated_at": datetime.now(timezone.utc),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)
