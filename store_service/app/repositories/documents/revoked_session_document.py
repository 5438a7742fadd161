from __future__ import annotations

from common.mongo.types import BaseDocument, MongoDateTime


class RevokedSessionDocument(BaseDocument):
    """MongoDB revoked_sessions 컬렉션 도큐먼트 모델.

    expires_at 이 지나면 TTL 인덱스로 자동 삭제된다 (토큰 자체도 그때 만료된다).
    """

    session_id: str
    user_id: str
    expires_at: MongoDateTime
