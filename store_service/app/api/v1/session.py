from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ...exceptions import SignOutError
from ...models.session import AuthSession
from ...services.auth_service import (
    IdentityProvider,
    get_identity_provider,
    resolve_gate,
)
from ..dependencies import get_current_session, get_optional_session
from ..errors import to_http_exception
from ..schemas.session import GateResponse, SignOutResponse

router = APIRouter()


@router.get("", response_model=GateResponse, summary="인증 게이트")
def get_gate(
    session: Annotated[AuthSession | None, Depends(get_optional_session)],
) -> GateResponse:
    """세션이 있으면 shell, 없으면 login 화면을 가리킨다."""

    return GateResponse.from_domain(resolve_gate(session), session)


@router.post("/sign-out", response_model=SignOutResponse, summary="로그아웃")
def sign_out(
    session: Annotated[AuthSession, Depends(get_current_session)],
    identity_provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> SignOutResponse:
    try:
        identity_provider.sign_out(session)
    except SignOutError as exc:
        raise to_http_exception(exc) from exc
    return SignOutResponse()
