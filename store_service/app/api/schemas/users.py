from __future__ import annotations

from pydantic import BaseModel

from common.models.user import User, UserRole
from common.types.datetime import UtcDateTime


class UserProfileResponse(BaseModel):
    user_id: str
    email: str
    name: str
    credits: float
    role: str
    is_banned: bool
    profile_picture: str | None = None
    created_at: UtcDateTime
    updated_at: UtcDateTime

    @classmethod
    def from_domain(cls, user: User) -> "UserProfileResponse":
        return cls(
            user_id=user.user_id,
            email=user.email,
            name=user.name,
            credits=user.credits,
            role=user.role.value,
            is_banned=user.is_banned,
            profile_picture=user.profile_picture,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ListUsersResponse(BaseModel):
    total: int
    items: list[UserProfileResponse]


class UpdateUserRequest(BaseModel):
    role: UserRole | None = None
    is_banned: bool | None = None
