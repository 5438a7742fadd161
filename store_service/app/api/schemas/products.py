from __future__ import annotations

from pydantic import BaseModel

from ...models.catalog import ProductCatalog, ProductView


class OperatorResponse(BaseModel):
    name: str
    display_name: str
    color_scheme: str
    logo_url: str | None = None


class CategoryResponse(BaseModel):
    name: str
    display_name: str
    icon: str
    sort_order: int = 0


class ProductCatalogResponse(BaseModel):
    category: str
    operator: str
    products: list[ProductView]
    categories: list[CategoryResponse]
    operators: list[OperatorResponse]

    @classmethod
    def from_domain(
        cls, catalog: ProductCatalog, category: str, operator: str
    ) -> "ProductCatalogResponse":
        return cls(
            category=category,
            operator=operator,
            products=catalog.products,
            categories=[
                CategoryResponse(
                    name=c.name,
                    display_name=c.display_name,
                    icon=c.icon,
                    sort_order=c.sort_order,
                )
                for c in catalog.categories
            ],
            operators=[
                OperatorResponse(
                    name=o.name,
                    display_name=o.display_name,
                    color_scheme=o.color_scheme,
                    logo_url=o.logo_url,
                )
                for o in catalog.operators
            ],
        )


class PurchaseNoticeResponse(BaseModel):
    product: ProductView
    order_created: bool = False
    message: str
