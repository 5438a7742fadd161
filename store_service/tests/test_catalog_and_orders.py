from __future__ import annotations

from datetime import timedelta

import pytest
from bson import ObjectId

from store_service.app.config import CatalogConfig, CategorySeed, OperatorSeed, ProductSeed
from store_service.app.models.catalog import (
    CategorySummary,
    OperatorSummary,
    ProductView,
    filter_products,
)
from store_service.app.models.order import Order, OrderStatus, OrderView
from store_service.app.repositories.documents.order_document import OrderDocument
from store_service.app.services.catalog_seed_service import CatalogSeedService
from store_service.app.services.orders_service import OrdersService
from store_service.tests.fakes import BASE_TIME, FakeCatalogRepository, FakeOrderRepository


def _product(pid: str, operator: str, category: str, sort_order: int = 0) -> ProductView:
    return ProductView(
        id=pid,
        name=f"{operator}-{category}",
        price_mmk=1000,
        price_credits=10,
        sort_order=sort_order,
        operator=OperatorSummary(
            name=operator, display_name=operator.upper(), color_scheme="#000"
        ),
        category=CategorySummary(name=category, display_name=category, icon="wifi"),
    )


PRODUCTS = [
    _product("p1", "mpt", "data", 1),
    _product("p2", "atom", "data", 2),
    _product("p3", "mpt", "minutes", 3),
]


@pytest.mark.parametrize(
    ("category", "operator", "expected"),
    [
        ("all", "all", ["p1", "p2", "p3"]),
        ("data", "all", ["p1", "p2"]),
        ("all", "mpt", ["p1", "p3"]),
        ("data", "mpt", ["p1"]),
        ("points", "all", []),
    ],
)
def test_filter_products(category: str, operator: str, expected: list[str]) -> None:
    result = filter_products(PRODUCTS, category=category, operator=operator)

    assert [p.id for p in result] == expected


@pytest.mark.parametrize(
    ("stored", "expected"),
    [
        ("approved", OrderStatus.PROCESSING),
        ("denied", OrderStatus.FAILED),
        ("pending", OrderStatus.PENDING),
        ("Completed", OrderStatus.COMPLETED),
    ],
)
def test_order_document_migrates_legacy_status(stored: str, expected: OrderStatus) -> None:
    doc = OrderDocument.model_validate(
        {
            "_id": ObjectId(),
            "user_id": "user-1",
            "product_id": ObjectId(),
            "phone_number": "09123456789",
            "price_credits": 20,
            "status": stored,
            "created_at": BASE_TIME,
            "updated_at": BASE_TIME,
        }
    )

    order = doc.to_domain()

    assert order.status == expected
    assert isinstance(order.product_id, str)


def test_unknown_order_status_is_rejected() -> None:
    with pytest.raises(ValueError):
        Order(
            user_id="user-1",
            product_id="p1",
            phone_number="09",
            price_credits=1,
            status="shipped",
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )


def test_my_orders_are_owned_and_newest_first() -> None:
    def order(oid: str, user_id: str, hours: int) -> OrderView:
        ts = BASE_TIME + timedelta(hours=hours)
        return OrderView(
            order=Order(
                id=oid,
                user_id=user_id,
                product_id="p1",
                phone_number="09123456789",
                price_credits=10,
                created_at=ts,
                updated_at=ts,
            )
        )

    repo = FakeOrderRepository(
        [order("o1", "user-1", 0), order("o2", "user-2", 1), order("o3", "user-1", 2)]
    )

    views = OrdersService(order_repo=repo).list_my_orders("user-1")

    assert [v.order.id for v in views] == ["o3", "o1"]


def test_seed_skips_products_with_unknown_references() -> None:
    repo = FakeCatalogRepository()
    catalog = CatalogConfig(
        operators=[OperatorSeed(name="mpt", display_name="MPT", color_scheme="#f7a800")],
        categories=[CategorySeed(name="data", display_name="Data", icon="wifi")],
        products=[
            ProductSeed(
                name="1GB", operator="mpt", category="data", price_mmk=2000, price_credits=20
            ),
            ProductSeed(
                name="2GB", operator="ghost", category="data", price_mmk=1, price_credits=1
            ),
        ],
    )

    summary = CatalogSeedService(repo).seed(catalog)

    assert (summary.operators, summary.categories, summary.products) == (1, 1, 1)
    assert ("product", "1GB") in repo.upserted
    assert ("product", "2GB") not in repo.upserted
