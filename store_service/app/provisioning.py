"""운영용 CLI (store-provision).

- seed-catalog: config.yaml 의 catalog 섹션을 operators/categories/products 에 upsert
- grant-admin --email: 저장된 프로필에 admin 역할을 부여
"""

from __future__ import annotations

import argparse
import logging
import sys

from common.logger import setup_logger
from common.models.user import UserRole
from common.mongo.client import close_client, get_database

from .config import load_config
from .repositories.catalog_repository import CatalogRepository
from .repositories.user_repository import UserRepository
from .services.catalog_seed_service import CatalogSeedService


logger = logging.getLogger(__name__)


def seed_catalog() -> int:
    config = load_config()
    service = CatalogSeedService(CatalogRepository(get_database()))
    summary = service.seed(config.catalog)
    print(
        f"seeded operators={summary.operators} "
        f"categories={summary.categories} products={summary.products}"
    )
    return 0


def grant_admin(email: str) -> int:
    repo = UserRepository(get_database())
    user = repo.set_role_by_email(email, UserRole.ADMIN)
    if user is None:
        # 프로필은 첫 로그인 때 생긴다.
        print(f"no profile found for {email}; sign in once and retry", file=sys.stderr)
        return 1

    logger.info("admin role granted", extra={"user_id": user.user_id})
    print(f"granted admin to {user.email} ({user.user_id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="store-provision")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed-catalog", help="upsert catalog from config.yaml")

    grant = sub.add_parser("grant-admin", help="give the admin role to a user")
    grant.add_argument("--email", required=True)

    return parser


def main(argv: list[str] | None = None) -> int:
    setup_logger()
    args = build_parser().parse_args(argv)
    try:
        if args.command == "seed-catalog":
            return seed_catalog()
        return grant_admin(args.email)
    finally:
        close_client()


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
