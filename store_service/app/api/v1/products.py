from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ...exceptions import StoreError
from ...models.catalog import ALL_SENTINEL
from ...models.session import Viewer
from ...services.products_service import ProductsService, get_products_service
from ..dependencies import get_viewer
from ..errors import to_http_exception
from ..schemas.products import ProductCatalogResponse, PurchaseNoticeResponse

router = APIRouter()


@router.get("", response_model=ProductCatalogResponse, summary="상품 목록")
def list_products(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[ProductsService, Depends(get_products_service)],
    category: Annotated[str, Query()] = ALL_SENTINEL,
    operator: Annotated[str, Query()] = ALL_SENTINEL,
) -> ProductCatalogResponse:
    category = category.strip().lower() or ALL_SENTINEL
    operator = operator.strip().lower() or ALL_SENTINEL
    catalog = service.get_catalog(category=category, operator=operator)
    return ProductCatalogResponse.from_domain(catalog, category, operator)


@router.post(
    "/{product_id}/purchase",
    response_model=PurchaseNoticeResponse,
    summary="상품 구매 (준비 중)",
)
def purchase_product(
    product_id: str,
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[ProductsService, Depends(get_products_service)],
) -> PurchaseNoticeResponse:
    try:
        product, message = service.request_purchase(viewer.profile, product_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return PurchaseNoticeResponse(product=product, message=message)
