from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.session import AuthSession, GateDecision, Identity


class IdentityResponse(BaseModel):
    id: str
    email: str
    name: str
    profile_picture: str | None = None

    @classmethod
    def from_domain(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            email=identity.email,
            name=identity.name,
            profile_picture=identity.profile_picture,
        )


class GateResponse(BaseModel):
    view: Literal["shell", "login"]
    user: IdentityResponse | None = None
    expires_at: UtcDateTime | None = None

    @classmethod
    def from_domain(
        cls, decision: GateDecision, session: AuthSession | None
    ) -> "GateResponse":
        return cls(
            view=decision.view,
            user=IdentityResponse.from_domain(decision.user) if decision.user else None,
            expires_at=session.expires_at if session is not None else None,
        )


class SignOutResponse(BaseModel):
    view: Literal["login"] = "login"
    message: str = "signed_out"
