from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database

from common.models.user import User, UserCreateInput, UserRole
from common.mongo.client import get_database

from ..config import AppConfig, get_app_config
from ..models.pricing import credits_to_mmk
from ..models.session import Identity
from ..models.shell import (
    ADMIN_SHORTCUTS,
    NAVIGATION_ACTIONS,
    USER_MENU_ACTIONS,
    ShellView,
)
from ..repositories.interfaces import UserRepositoryInterface
from ..repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class ShellService:
    """메인 화면(셸) 비즈니스 로직.

    - 로그인한 identity 의 프로필을 읽고, 없으면 처음 방문으로 보고 만든다.
    - admin 판단은 저장된 role 만 본다. bootstrap_email 은 프로필 생성 시점에만 쓰인다.
    """

    def __init__(self, user_repo: UserRepositoryInterface, config: AppConfig) -> None:
        self._user_repo = user_repo
        self._config = config

    def _initial_role(self, email: str) -> UserRole:
        bootstrap = self._config.admin.bootstrap_email
        if bootstrap and email.strip().lower() == bootstrap:
            return UserRole.ADMIN
        return UserRole.USER

    def ensure_profile(self, identity: Identity) -> User:
        existing = self._user_repo.find_by_user_id(identity.id)
        if existing is not None:
            return existing

        input_model = UserCreateInput(
            user_id=identity.id,
            email=identity.email,
            name=identity.name,
            profile_picture=identity.profile_picture,
        )
        now = datetime.now(timezone.utc)
        user = User(
            **input_model.model_dump(),
            credits=0.0,
            role=self._initial_role(identity.email),
            created_at=now,
            updated_at=now,
        )

        profile, created = self._user_repo.create_if_absent(user)
        if created:
            logger.info(
                "user profile created",
                extra={"user_id": profile.user_id, "body": profile.role.value},
            )
        return profile

    def build_shell(self, profile: User) -> ShellView:
        rate = self._config.store.credit_rate_mmk
        return ShellView(
            greeting_name=profile.name,
            email=profile.email,
            credits=profile.credits,
            credits_display=f"{profile.credits:.2f}",
            balance_mmk=credits_to_mmk(profile.credits, rate),
            role=profile.role.value,
            is_admin=profile.is_admin,
            is_banned=profile.is_banned,
            navigation=list(NAVIGATION_ACTIONS),
            user_menu=list(USER_MENU_ACTIONS),
            admin_shortcuts=list(ADMIN_SHORTCUTS) if profile.is_admin else [],
        )


def get_user_repository(
    db: Database = Depends(get_database),
) -> UserRepositoryInterface:
    """FastAPI DI용 UserRepository 팩토리."""

    return UserRepository(db)


def get_shell_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    config: AppConfig = Depends(get_app_config),
) -> ShellService:
    """FastAPI DI용 ShellService 팩토리."""

    return ShellService(user_repo=user_repo, config=config)
