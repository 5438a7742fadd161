from __future__ import annotations

from datetime import datetime, timezone

from pymongo.collection import Collection
from pymongo.database import Database

from common.mongo.types import try_object_id

from ..config import CategorySeed, OperatorSeed, ProductSeed
from ..models.catalog import (
    Category,
    CategorySummary,
    Operator,
    OperatorSummary,
    ProductView,
)
from .documents.catalog_document import (
    CategoryDocument,
    OperatorDocument,
    ProductDocument,
)
from .interfaces import CatalogRepositoryInterface


class CatalogRepository(CatalogRepositoryInterface):
    """operators / categories / products 컬렉션에 대한 MongoDB 접근 레이어.

    상품은 활성 통신사와 활성 카테고리에 모두 연결된 경우에만 노출된다.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._operators = database["operators"]
        self._categories = database["categories"]
        self._products = database["products"]

    @staticmethod
    def _product_pipeline(match: dict) -> list[dict]:
        return [
            {"$match": {**match, "is_active": True}},
            {
                "$lookup": {
                    "from": "operators",
                    "localField": "operator",
                    "foreignField": "name",
                    "as": "operator_doc",
                }
            },
            {"$unwind": "$operator_doc"},
            {"$match": {"operator_doc.is_active": True}},
            {
                "$lookup": {
                    "from": "categories",
                    "localField": "category",
                    "foreignField": "name",
                    "as": "category_doc",
                }
            },
            {"$unwind": "$category_doc"},
            {"$match": {"category_doc.is_active": True}},
            {"$sort": {"sort_order": 1, "_id": 1}},
        ]

    @staticmethod
    def _to_view(doc: dict) -> ProductView:
        operator_doc = doc.pop("operator_doc")
        category_doc = doc.pop("category_doc")
        product = ProductDocument.model_validate(doc).to_domain()
        return ProductView(
            id=product.id,
            name=product.name,
            description=product.description,
            price_mmk=product.price_mmk,
            price_credits=product.price_credits,
            sort_order=product.sort_order,
            operator=OperatorSummary.model_validate(operator_doc),
            category=CategorySummary.model_validate(category_doc),
        )

    def list_active_products(self) -> list[ProductView]:
        cursor = self._products.aggregate(self._product_pipeline({}))
        return [self._to_view(doc) for doc in cursor]

    def find_active_product(self, product_id: str) -> ProductView | None:
        oid = try_object_id(product_id)
        if oid is None:
            return None
        docs = list(self._products.aggregate(self._product_pipeline({"_id": oid})))
        if not docs:
            return None
        return self._to_view(docs[0])

    def list_active_categories(self) -> list[Category]:
        cursor = self._categories.find(
            {"is_active": True}, sort=[("sort_order", 1), ("name", 1)]
        )
        return [CategoryDocument.model_validate(doc).to_domain() for doc in cursor]

    def list_active_operators(self) -> list[Operator]:
        cursor = self._operators.find({"is_active": True}, sort=[("name", 1)])
        return [OperatorDocument.model_validate(doc).to_domain() for doc in cursor]

    def _upsert(self, collection: Collection, filter_doc: dict, fields: dict) -> str:
        now = datetime.now(timezone.utc)
        result = collection.update_one(
            filter_doc,
            {
                "$setOnInsert": {"created_at": now},
                "$set": {**fields, "updated_at": now},
            },
            upsert=True,
        )
        if result.upserted_id is not None:
            return str(result.upserted_id)

        existing = collection.find_one(filter_doc, {"_id": 1})
        if not existing:
            raise RuntimeError("catalog upsert failed: document not found after update")
        return str(existing["_id"])

    def upsert_operator(self, seed: OperatorSeed) -> str:
        return self._upsert(
            self._operators,
            {"name": seed.name},
            {
                "name": seed.name,
                "display_name": seed.display_name,
                "color_scheme": seed.color_scheme,
                "logo_url": seed.logo_url,
                "is_active": seed.is_active,
            },
        )

    def upsert_category(self, seed: CategorySeed) -> str:
        return self._upsert(
            self._categories,
            {"name": seed.name},
            {
                "name": seed.name,
                "display_name": seed.display_name,
                "icon": seed.icon,
                "sort_order": seed.sort_order,
                "is_active": seed.is_active,
            },
        )

    def upsert_product(self, seed: ProductSeed) -> str:
        return self._upsert(
            self._products,
            {"operator": seed.operator, "category": seed.category, "name": seed.name},
            {
                "name": seed.name,
                "description": seed.description,
                "operator": seed.operator,
                "category": seed.category,
                "price_mmk": seed.price_mmk,
                "price_credits": seed.price_credits,
                "is_active": seed.is_active,
                "sort_order": seed.sort_order,
            },
        )
