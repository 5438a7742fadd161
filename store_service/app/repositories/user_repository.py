from __future__ import annotations

import re
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.models.user import ListUsersFilter, User, UserRole

from .documents.user_document import UserDocument
from .interfaces import UserRepositoryInterface


class UserRepository(UserRepositoryInterface):
    """users 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["users"]

    @staticmethod
    def _from_document(doc: dict) -> User:
        return UserDocument.model_validate(doc).to_domain()

    def find_by_user_id(self, user_id: str) -> User | None:
        doc = self._col.find_one({"user_id": user_id})
        if not doc:
            return None
        return self._from_document(doc)

    def create_if_absent(self, user: User) -> tuple[User, bool]:
        now = datetime.now(timezone.utc)
        user.created_at = now
        user.updated_at = now

        payload = UserDocument.from_domain(user).to_mongo_record()
        try:
            self._col.insert_one(payload)
        except DuplicateKeyError:
            # 첫 방문 요청이 동시에 들어온 경우: 먼저 만든 쪽의 프로필을 그대로 쓴다.
            existing = self.find_by_user_id(user.user_id)
            if existing is None:
                raise
            return existing, False
        return self._from_document(payload), True

    def list(self, flt: ListUsersFilter) -> list[User]:
        query: dict = {}
        if flt.query:
            pattern = re.escape(flt.query.strip())
            query["$or"] = [
                {"name": {"$regex": pattern, "$options": "i"}},
                {"email": {"$regex": pattern, "$options": "i"}},
            ]
        if flt.role is not None:
            query["role"] = flt.role.value
        if flt.is_banned is not None:
            query["is_banned"] = flt.is_banned

        cursor = self._col.find(query, sort=[("created_at", -1), ("_id", -1)])
        return [self._from_document(doc) for doc in cursor]

    def update_admin_fields(
        self,
        user_id: str,
        role: UserRole | None = None,
        is_banned: bool | None = None,
    ) -> User | None:
        updates: dict = {"updated_at": datetime.now(timezone.utc)}
        if role is not None:
            updates["role"] = role.value
        if is_banned is not None:
            updates["is_banned"] = is_banned

        doc = self._col.find_one_and_update(
            {"user_id": user_id},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)

    def set_role_by_email(self, email: str, role: UserRole) -> User | None:
        doc = self._col.find_one_and_update(
            {"email": {"$regex": f"^{re.escape(email.strip())}$", "$options": "i"}},
            {"$set": {"role": role.value, "updated_at": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            return None
        return self._from_document(doc)
