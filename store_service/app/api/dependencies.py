"""인증 게이트 / 권한 의존성.

- get_optional_session: 세션을 못 가져오면(잘못된 토큰, 저장소 오류) 로그만 남기고 None
- get_current_session: 세션이 없으면 401
- get_viewer: 프로필을 보장하고 요청당 한 번 Viewer 를 만든다
- require_admin: 저장된 role 이 admin 이 아니면 403
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..exceptions import AccessDeniedError, StoreError
from ..models.session import AuthSession, Viewer
from ..services.auth_service import IdentityProvider, get_identity_provider
from ..services.shell_service import ShellService, get_shell_service
from .errors import error_detail, to_http_exception


logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_session(
    request: Request,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> AuthSession | None:
    if credentials is None or not credentials.credentials:
        return None

    try:
        session = identity_provider.get_session(credentials.credentials)
    except Exception:  # noqa: BLE001
        logger.exception("failed to fetch session; treating as signed out")
        return None

    if session is not None:
        request.state.user_id = session.user.id
    return session


def get_current_session(
    session: Annotated[AuthSession | None, Depends(get_optional_session)],
) -> AuthSession:
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "unauthenticated", "message": "Sign in required."},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


def get_viewer(
    session: Annotated[AuthSession, Depends(get_current_session)],
    shell_service: Annotated[ShellService, Depends(get_shell_service)],
) -> Viewer:
    """로그인한 유저의 프로필을 저장소에서 읽어(없으면 만들어) Viewer 로 감싼다."""

    try:
        profile = shell_service.ensure_profile(session.user)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return Viewer(session=session, profile=profile)


def require_admin(
    viewer: Annotated[Viewer, Depends(get_viewer)],
) -> Viewer:
    if not viewer.is_admin:
        logger.warning("admin access denied", extra={"user_id": viewer.user_id})
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail(AccessDeniedError()),
        )
    return viewer
