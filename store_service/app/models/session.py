from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from common.models.user import User


class Identity(BaseModel):
    """identity provider 가 확인해 준 로그인 주체."""

    id: str
    email: str
    name: str
    profile_picture: str | None = None


class AuthSession(BaseModel):
    """검증된 액세스 토큰 하나에 대응하는 세션.

    - session_id 는 토큰의 jti (없으면 토큰 sha256) 로, 로그아웃 시 폐기 키로 쓴다.
    """

    session_id: str
    access_token: str
    expires_at: datetime
    user: Identity


class GateDecision(BaseModel):
    view: Literal["shell", "login"]
    user: Identity | None = None


class Viewer(BaseModel):
    """요청당 한 번 해석되는 권한 컨텍스트.

    is_admin 은 저장된 role 에서만 결정된다.
    """

    session: AuthSession
    profile: User

    @property
    def user_id(self) -> str:
        return self.profile.user_id

    @property
    def is_admin(self) -> bool:
        return self.profile.is_admin
