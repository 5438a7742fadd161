from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config import CatalogConfig
from ..repositories.interfaces import CatalogRepositoryInterface


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SeedSummary:
    operators: int = 0
    categories: int = 0
    products: int = 0


class CatalogSeedService:
    """config.yaml 의 catalog 섹션을 스토어에 반영한다.

    name 기준 upsert 라 여러 번 실행해도 결과가 같다.
    """

    def __init__(self, catalog_repo: CatalogRepositoryInterface) -> None:
        self._catalog_repo = catalog_repo

    def seed(self, catalog: CatalogConfig) -> SeedSummary:
        operator_names = {op.name for op in catalog.operators}
        category_names = {cat.name for cat in catalog.categories}

        summary = SeedSummary()
        for operator in catalog.operators:
            self._catalog_repo.upsert_operator(operator)
            summary.operators += 1
        for category in catalog.categories:
            self._catalog_repo.upsert_category(category)
            summary.categories += 1

        for product in catalog.products:
            if product.operator not in operator_names or product.category not in category_names:
                # 참조가 깨진 상품은 목록 조인에서 어차피 빠지므로 넣지 않는다.
                logger.warning(
                    "skipping product with unknown operator/category",
                    extra={"body": f"{product.operator}/{product.category}/{product.name}"},
                )
                continue
            self._catalog_repo.upsert_product(product)
            summary.products += 1

        logger.info(
            "catalog seeded",
            extra={
                "body": f"operators={summary.operators} categories={summary.categories} products={summary.products}"
            },
        )
        return summary
