from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, model_validator

from common.models.utils import normalize_id_fields_to_str


ALL_SENTINEL = "all"


class Operator(BaseModel):
    """통신사. API 에서는 읽기 전용 참조 데이터다."""

    id: str | None = None
    name: str
    display_name: str
    color_scheme: str
    logo_url: str | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id"])


class Category(BaseModel):
    id: str | None = None
    name: str
    display_name: str
    icon: str
    sort_order: int = 0
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id"])


class Product(BaseModel):
    """operator / category 는 각 컬렉션의 name 으로 참조한다."""

    id: str | None = None
    name: str
    description: str | None = None
    operator: str
    category: str
    price_mmk: int
    price_credits: float
    is_active: bool = True
    sort_order: int = 0
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _normalize_object_ids(cls, data: Any) -> Any:
        return normalize_id_fields_to_str(data, fields=["id"])


class OperatorSummary(BaseModel):
    name: str
    display_name: str
    color_scheme: str
    logo_url: str | None = None


class CategorySummary(BaseModel):
    name: str
    display_name: str
    icon: str


class ProductView(BaseModel):
    """operator / category 메타데이터가 조인된 상품."""

    id: str
    name: str
    description: str | None = None
    price_mmk: int
    price_credits: float
    sort_order: int = 0
    operator: OperatorSummary
    category: CategorySummary


class ProductCatalog(BaseModel):
    """상품 목록 화면 한 번에 필요한 데이터."""

    products: list[ProductView]
    categories: list[Category]
    operators: list[Operator]


def matches_filter(product: ProductView, category: str, operator: str) -> bool:
    """카테고리/통신사 필터 조건. "all" 은 조건 없음을 뜻한다."""

    category_match = category == ALL_SENTINEL or product.category.name == category
    operator_match = operator == ALL_SENTINEL or product.operator.name == operator
    return category_match and operator_match


def filter_products(
    products: list[ProductView],
    category: str = ALL_SENTINEL,
    operator: str = ALL_SENTINEL,
) -> list[ProductView]:
    return [p for p in products if matches_filter(p, category, operator)]
