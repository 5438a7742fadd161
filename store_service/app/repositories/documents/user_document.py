from __future__ import annotations

from common.models.user import User, UserRole
from common.mongo.types import BaseDocument, build_document_data_from_domain


class UserDocument(BaseDocument):
    """MongoDB users 컬렉션 도큐먼트 모델."""

    user_id: str
    email: str
    name: str
    credits: float = 0.0
    role: UserRole = UserRole.USER
    is_banned: bool = False
    profile_picture: str | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserDocument":
        data = build_document_data_from_domain(user)
        # User 도메인 모델에는 _id 를 노출하지 않는다.
        return cls.model_validate(data)

    def to_domain(self) -> User:
        return User(
            user_id=self.user_id,
            email=self.email,
            name=self.name,
            credits=round(float(self.credits), 2),
            role=self.role,
            is_banned=self.is_banned,
            profile_picture=self.profile_picture,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
