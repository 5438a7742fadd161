"""인증 게이트와 identity provider.

액세스 토큰은 외부 호스팅 인증 서비스가 발급한 HS256 JWT 다.
이 서비스는 토큰을 검증만 하고, 로그아웃은 세션 ID 를 revoked_sessions 에 남겨 처리한다.
"""

from __future__ import annotations

import hashlib
import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Protocol

from fastapi import Depends
from jose import JWTError, jwt
from pymongo.database import Database
from pymongo.errors import PyMongoError

from common.mongo.client import get_database

from ..exceptions import SignOutError
from ..models.session import AuthSession, GateDecision, Identity
from ..repositories.interfaces import RevokedSessionRepositoryInterface
from ..repositories.revoked_session_repository import RevokedSessionRepository


logger = logging.getLogger(__name__)


AUTH_JWT_SECRET_ENV = "AUTH_JWT_SECRET"
AUTH_JWT_AUDIENCE_ENV = "AUTH_JWT_AUDIENCE"

DEFAULT_AUDIENCE = "authenticated"
JWT_ALGORITHM = "HS256"


def get_jwt_secret() -> str:
    value = os.getenv(AUTH_JWT_SECRET_ENV)
    if not value:
        raise RuntimeError(
            f"{AUTH_JWT_SECRET_ENV} environment variable is required to verify sessions",
        )
    return value


def get_jwt_audience() -> str | None:
    """검증할 aud 클레임. 빈 문자열로 두면 aud 검증을 끈다."""

    value = os.getenv(AUTH_JWT_AUDIENCE_ENV)
    if value is None:
        return DEFAULT_AUDIENCE
    return value.strip() or None


class IdentityProvider(Protocol):
    def get_session(
        self, access_token: str
    ) -> AuthSession | None:  # pragma: no cover - Protocol
        """토큰이 유효하면 세션을, 아니면(위조/만료/로그아웃) None 을 반환한다."""
        ...

    def sign_out(self, session: AuthSession) -> None:  # pragma: no cover - Protocol
        """세션을 만료 시각까지 폐기한다. 실패하면 SignOutError."""
        ...


def _session_id_for(claims: dict[str, Any], access_token: str) -> str:
    jti = claims.get("jti") or claims.get("session_id")
    if jti:
        return str(jti)
    return hashlib.sha256(access_token.encode("utf-8")).hexdigest()


def _identity_from_claims(claims: dict[str, Any]) -> Identity | None:
    subject = claims.get("sub")
    email = str(claims.get("email") or "").strip()
    if not subject or not email:
        return None

    metadata = claims.get("user_metadata") or {}
    name = str(metadata.get("name") or metadata.get("full_name") or "").strip()
    if not name:
        # 이름이 없으면 이메일 앞부분을 표시 이름으로 쓴다.
        name = email.split("@", 1)[0]

    return Identity(
        id=str(subject),
        email=email,
        name=name,
        profile_picture=metadata.get("avatar_url") or metadata.get("picture"),
    )


class JwtIdentityProvider(IdentityProvider):
    def __init__(
        self,
        secret: str,
        revoked_repo: RevokedSessionRepositoryInterface,
        audience: str | None = DEFAULT_AUDIENCE,
    ) -> None:
        self._secret = secret
        self._audience = audience
        self._revoked_repo = revoked_repo

    def _decode(self, access_token: str) -> dict[str, Any] | None:
        options = {"verify_aud": self._audience is not None}
        try:
            return jwt.decode(
                access_token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._audience,
                options=options,
            )
        except JWTError as exc:
            logger.info("access token rejected", extra={"body": str(exc)})
            return None

    def get_session(self, access_token: str) -> AuthSession | None:
        if not access_token:
            return None

        claims = self._decode(access_token)
        if claims is None:
            return None

        identity = _identity_from_claims(claims)
        exp = claims.get("exp")
        if identity is None or exp is None:
            logger.info("access token is missing sub/email/exp claims")
            return None

        session_id = _session_id_for(claims, access_token)
        if self._revoked_repo.is_revoked(session_id):
            return None

        return AuthSession(
            session_id=session_id,
            access_token=access_token,
            expires_at=datetime.fromtimestamp(int(exp), tz=timezone.utc),
            user=identity,
        )

    def sign_out(self, session: AuthSession) -> None:
        try:
            self._revoked_repo.revoke(
                session_id=session.session_id,
                user_id=session.user.id,
                expires_at=session.expires_at,
            )
        except PyMongoError as exc:
            logger.exception(
                "failed to revoke session", extra={"user_id": session.user.id}
            )
            raise SignOutError(f"Error signing out: {exc}") from exc


def resolve_gate(session: AuthSession | None) -> GateDecision:
    """유저와 세션이 모두 있을 때만 메인 화면을 보여준다."""

    if session is not None and session.user is not None:
        return GateDecision(view="shell", user=session.user)
    return GateDecision(view="login", user=None)


@lru_cache(maxsize=1)
def _jwt_settings() -> tuple[str, str | None]:
    return get_jwt_secret(), get_jwt_audience()


def get_revoked_session_repository(
    db: Database = Depends(get_database),
) -> RevokedSessionRepositoryInterface:
    """FastAPI DI용 RevokedSessionRepository 팩토리."""

    return RevokedSessionRepository(db)


def get_identity_provider(
    revoked_repo: RevokedSessionRepositoryInterface = Depends(
        get_revoked_session_repository
    ),
) -> IdentityProvider:
    """FastAPI DI용 IdentityProvider 팩토리."""

    secret, audience = _jwt_settings()
    return JwtIdentityProvider(
        secret=secret, revoked_repo=revoked_repo, audience=audience
    )
