from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class UserRole(StrEnum):
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """스토어 유저(프로필) 도메인 모델.

    - Mongo users 컬렉션과 1:1 로 매핑된다.
    - user_id 는 identity provider 가 발급한 subject 이며, 유저의 유일한 식별자다.
    - credits 는 소수점 2자리까지의 잔액이다. 음수 방지는 애플리케이션에서 강제하지 않는다.
    """

    user_id: str
    email: str
    name: str
    credits: float = Field(default=0.0)
    role: UserRole = Field(default=UserRole.USER)
    is_banned: bool = Field(default=False)
    profile_picture: str | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class UserCreateInput(BaseModel):
    """최초 로그인 시 프로필을 만들 때 identity 에서 가져오는 값."""

    user_id: str
    email: str
    name: str
    profile_picture: str | None = None


class ListUsersFilter(BaseModel):
    """어드민 유저 목록 필터.

    - query: 이름/이메일 부분 일치 (대소문자 무시)
    - role / is_banned: 지정된 경우에만 정확히 일치
    """

    query: str | None = None
    role: UserRole | None = None
    is_banned: bool | None = None
