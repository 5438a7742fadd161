from __future__ import annotations

from common.mongo.types import BaseDocument

from ...models.catalog import Category, Operator, Product


class OperatorDocument(BaseDocument):
    """MongoDB operators 컬렉션 도큐먼트 모델."""

    name: str
    display_name: str
    color_scheme: str
    logo_url: str | None = None
    is_active: bool = True

    def to_domain(self) -> Operator:
        return Operator(
            id=self.id_str,
            name=self.name,
            display_name=self.display_name,
            color_scheme=self.color_scheme,
            logo_url=self.logo_url,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class CategoryDocument(BaseDocument):
    """MongoDB categories 컬렉션 도큐먼트 모델."""

    name: str
    display_name: str
    icon: str
    sort_order: int = 0
    is_active: bool = True

    def to_domain(self) -> Category:
        return Category(
            id=self.id_str,
            name=self.name,
            display_name=self.display_name,
            icon=self.icon,
            sort_order=self.sort_order,
            is_active=self.is_active,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ProductDocument(BaseDocument):
    """MongoDB products 컬렉션 도큐먼트 모델."""

    name: str
    description: str | None = None
    operator: str
    category: str
    price_mmk: int
    price_credits: float
    is_active: bool = True
    sort_order: int = 0

    def to_domain(self) -> Product:
        return Product(
            id=self.id_str,
            name=self.name,
            description=self.description,
            operator=self.operator,
            category=self.category,
            price_mmk=self.price_mmk,
            price_credits=self.price_credits,
            is_active=self.is_active,
            sort_order=self.sort_order,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
