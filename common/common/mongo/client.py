from __future__ import annotations

import logging
import threading
from typing import Optional

from pymongo import ASCENDING, DESCENDING, IndexModel, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import get_mongo_db_name, get_mongo_timeout_ms, get_mongo_uri


logger = logging.getLogger(__name__)


_client: Optional[MongoClient] = None
_db: Optional[Database] = None
_lock = threading.Lock()


def get_client() -> MongoClient:
    """프로세스 전역 MongoClient 싱글톤을 반환한다.

    - MONGO_URI 로 접속하고 ping 으로 연결을 검증한다.
    - MONGO_DB_NAME 이 없으면 URI 의 기본 데이터베이스를 사용한다.
    - 최초 연결 시 스토어 컬렉션 인덱스를 한 번 보장한다.
    """

    global _client, _db

    if _client is not None:
        return _client

    with _lock:
        if _client is not None:
            return _client

        client: MongoClient = MongoClient(
            get_mongo_uri(),
            serverSelectionTimeoutMS=get_mongo_timeout_ms(),
            tz_aware=True,
        )

        try:
            client.admin.command("ping")
        except PyMongoError as exc:
            # 연결 실패는 PyMongoError 그대로 전파한다 (API 에서 503).
            client.close()
            logger.error("failed to connect to MongoDB: %s", exc)
            raise

        db_name = get_mongo_db_name()
        try:
            db = client[db_name] if db_name else client.get_default_database()
        except Exception as exc:  # noqa: BLE001
            client.close()
            raise RuntimeError(
                "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
            ) from exc

        try:
            ensure_indexes(db)
        except Exception as exc:  # noqa: BLE001
            client.close()
            logger.error("failed to ensure MongoDB indexes: %s", exc)
            raise

        _client = client
        _db = db
        logger.info("MongoDB connected and indexes ensured (db=%s)", db.name)
        return _client


def get_database() -> Database:
    """전역 기본 Database 객체를 반환한다. FastAPI Depends 용으로도 쓴다."""

    if _db is None:
        get_client()
    assert _db is not None  # get_client 가 실패했다면 이미 예외가 발생했어야 한다.
    return _db


def close_client() -> None:
    """애플리케이션 종료 시 커넥션 풀을 정리한다."""

    global _client, _db

    with _lock:
        if _client is not None:
            _client.close()
        _client = None
        _db = None


def ensure_indexes(db: Database) -> None:
    """스토어 컬렉션의 필수 인덱스를 생성한다. 여러 번 호출해도 안전하다."""

    db["users"].create_indexes(
        [
            IndexModel([("user_id", ASCENDING)], name="uniq_user_id", unique=True),
            IndexModel([("created_at", DESCENDING)], name="idx_created_at_desc"),
            IndexModel([("email", ASCENDING)], name="idx_email"),
        ]
    )

    db["operators"].create_indexes(
        [IndexModel([("name", ASCENDING)], name="uniq_name", unique=True)]
    )

    db["categories"].create_indexes(
        [
            IndexModel([("name", ASCENDING)], name="uniq_name", unique=True),
            IndexModel(
                [("is_active", ASCENDING), ("sort_order", ASCENDING)],
                name="idx_active_sort_order",
            ),
        ]
    )

    db["products"].create_indexes(
        [
            IndexModel(
                [("operator", ASCENDING), ("category", ASCENDING), ("name", ASCENDING)],
                name="uniq_operator_category_name",
                unique=True,
            ),
            IndexModel(
                [("is_active", ASCENDING), ("sort_order", ASCENDING)],
                name="idx_active_sort_order",
            ),
        ]
    )

    db["orders"].create_indexes(
        [
            IndexModel(
                [("user_id", ASCENDING), ("created_at", DESCENDING)],
                name="idx_user_created_at_desc",
            ),
            IndexModel([("created_at", DESCENDING)], name="idx_created_at_desc"),
        ]
    )

    db["credit_requests"].create_indexes(
        [
            IndexModel(
                [("user_id", ASCENDING), ("created_at", DESCENDING)],
                name="idx_user_created_at_desc",
            ),
            IndexModel(
                [("status", ASCENDING), ("created_at", DESCENDING)],
                name="idx_status_created_at_desc",
            ),
        ]
    )

    # 요청 하나당 잔액 반영은 한 번뿐이어야 한다.
    db["credit_transactions"].create_indexes(
        [
            IndexModel(
                [("credit_request_id", ASCENDING)],
                name="uniq_credit_request_id",
                unique=True,
                partialFilterExpression={"credit_request_id": {"$type": "string"}},
            ),
            IndexModel(
                [("user_id", ASCENDING), ("created_at", DESCENDING)],
                name="idx_user_created_at_desc",
            ),
        ]
    )

    db["revoked_sessions"].create_indexes(
        [
            IndexModel(
                [("session_id", ASCENDING)], name="uniq_session_id", unique=True
            ),
            IndexModel(
                [("expires_at", ASCENDING)],
                name="ttl_expires_at",
                expireAfterSeconds=0,
            ),
        ]
    )
