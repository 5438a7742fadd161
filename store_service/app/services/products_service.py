from __future__ import annotations

import logging

from fastapi import Depends
from pymongo.database import Database

from common.models.user import User
from common.mongo.client import get_database

from ..exceptions import BannedUserError, ProductNotFoundError
from ..models.catalog import ALL_SENTINEL, ProductCatalog, ProductView, filter_products
from ..repositories.catalog_repository import CatalogRepository
from ..repositories.interfaces import CatalogRepositoryInterface


logger = logging.getLogger(__name__)


PURCHASE_NOTICE_TEMPLATE = "Purchase functionality for {name} will be available soon."


class ProductsService:
    """상품 목록/필터 비즈니스 로직. 카탈로그는 읽기 전용이다."""

    def __init__(self, catalog_repo: CatalogRepositoryInterface) -> None:
        self._catalog_repo = catalog_repo

    def get_catalog(
        self,
        category: str = ALL_SENTINEL,
        operator: str = ALL_SENTINEL,
    ) -> ProductCatalog:
        products = self._catalog_repo.list_active_products()
        return ProductCatalog(
            products=filter_products(products, category=category, operator=operator),
            categories=self._catalog_repo.list_active_categories(),
            operators=self._catalog_repo.list_active_operators(),
        )

    def request_purchase(self, profile: User, product_id: str) -> tuple[ProductView, str]:
        """구매 버튼. 아직 주문을 만들지 않고 안내 문구만 돌려준다."""

        if profile.is_banned:
            raise BannedUserError()

        product = self._catalog_repo.find_active_product(product_id)
        if product is None:
            raise ProductNotFoundError()

        logger.info(
            "purchase requested",
            extra={"user_id": profile.user_id, "body": product.id},
        )
        return product, PURCHASE_NOTICE_TEMPLATE.format(name=product.name)


def get_catalog_repository(
    db: Database = Depends(get_database),
) -> CatalogRepositoryInterface:
    """FastAPI DI용 CatalogRepository 팩토리."""

    return CatalogRepository(db)


def get_products_service(
    catalog_repo: CatalogRepositoryInterface = Depends(get_catalog_repository),
) -> ProductsService:
    """FastAPI DI용 ProductsService 팩토리."""

    return ProductsService(catalog_repo=catalog_repo)
