from __future__ import annotations

import time

from jose import jwt
from pymongo.errors import PyMongoError
import pytest

from store_service.app.exceptions import SignOutError
from store_service.app.services.auth_service import (
    DEFAULT_AUDIENCE,
    JwtIdentityProvider,
    resolve_gate,
)
from store_service.tests.fakes import FakeRevokedSessionRepository, build_session


SECRET = "test-secret"


def _token(**overrides) -> str:
    claims = {
        "sub": "user-1",
        "email": "mya@example.com",
        "aud": DEFAULT_AUDIENCE,
        "exp": int(time.time()) + 3600,
        "jti": "session-abc",
        "user_metadata": {"name": "Mya"},
    }
    claims.update(overrides)
    return jwt.encode(claims, SECRET, algorithm="HS256")


def _provider() -> tuple[JwtIdentityProvider, FakeRevokedSessionRepository]:
    revoked = FakeRevokedSessionRepository()
    return JwtIdentityProvider(secret=SECRET, revoked_repo=revoked), revoked


def test_valid_token_yields_session() -> None:
    provider, _ = _provider()

    session = provider.get_session(_token())

    assert session is not None
    assert session.session_id == "session-abc"
    assert session.user.id == "user-1"
    assert session.user.name == "Mya"


def test_name_falls_back_to_email_local_part() -> None:
    provider, _ = _provider()

    session = provider.get_session(_token(user_metadata={}))

    assert session is not None
    assert session.user.name == "mya"


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        jwt.encode({"sub": "user-1", "email": "a@b.c"}, "other-secret", algorithm="HS256"),
    ],
)
def test_invalid_tokens_are_treated_as_no_session(token: str) -> None:
    provider, _ = _provider()

    assert provider.get_session(token) is None


def test_expired_and_wrong_audience_tokens_are_rejected() -> None:
    provider, _ = _provider()

    assert provider.get_session(_token(exp=int(time.time()) - 10)) is None
    assert provider.get_session(_token(aud="someone-else")) is None


def test_sign_out_revokes_session() -> None:
    provider, revoked = _provider()
    token = _token()
    session = provider.get_session(token)
    assert session is not None

    provider.sign_out(session)

    assert "session-abc" in revoked.revoked
    assert provider.get_session(token) is None


def test_sign_out_failure_is_reported() -> None:
    provider, revoked = _provider()
    revoked.fail = PyMongoError("down")

    with pytest.raises(SignOutError):
        provider.sign_out(build_session())


def test_gate_shows_shell_only_with_session() -> None:
    assert resolve_gate(None).view == "login"

    decision = resolve_gate(build_session())

    assert decision.view == "shell"
    assert decision.user is not None
