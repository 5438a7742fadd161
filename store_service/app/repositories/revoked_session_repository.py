from __future__ import annotations

from datetime import datetime, timezone

from pymongo.database import Database

from .documents.revoked_session_document import RevokedSessionDocument
from .interfaces import RevokedSessionRepositoryInterface


class RevokedSessionRepository(RevokedSessionRepositoryInterface):
    """revoked_sessions 컬렉션에 대한 MongoDB 접근 레이어.

    로그아웃한 세션 ID 를 토큰 만료 시각까지 보관한다.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["revoked_sessions"]

    def revoke(self, session_id: str, user_id: str, expires_at: datetime) -> None:
        now = datetime.now(timezone.utc)
        payload = RevokedSessionDocument(
            session_id=session_id,
            user_id=user_id,
            expires_at=expires_at,
            created_at=now,
            updated_at=now,
        ).to_mongo_record()

        # 같은 세션으로 두 번 로그아웃해도 한 건만 남는다.
        self._col.update_one(
            {"session_id": session_id},
            {"$setOnInsert": payload},
            upsert=True,
        )

    def is_revoked(self, session_id: str) -> bool:
        # TTL 삭제가 늦어도 그 시점엔 토큰 자체가 만료되어 있으므로 존재 여부만 본다.
        return self._col.count_documents({"session_id": session_id}, limit=1) > 0
