from __future__ import annotations

from common.models.user import UserRole

from store_service.app.models.session import Identity
from store_service.app.services.shell_service import ShellService
from store_service.tests.fakes import FakeUserRepository, build_config, build_user


def _identity(email: str = "mya@example.com", user_id: str = "user-1") -> Identity:
    return Identity(id=user_id, email=email, name="Mya")


def test_first_visit_creates_profile_with_zero_credits() -> None:
    repo = FakeUserRepository()
    service = ShellService(user_repo=repo, config=build_config())

    profile = service.ensure_profile(_identity())

    assert profile.user_id == "user-1"
    assert profile.credits == 0
    assert profile.role == UserRole.USER
    assert list(repo.users) == ["user-1"]


def test_repeat_visits_reuse_the_single_profile() -> None:
    repo = FakeUserRepository()
    service = ShellService(user_repo=repo, config=build_config())

    first = service.ensure_profile(_identity())
    second = service.ensure_profile(_identity())

    assert first == second
    assert repo.create_calls == 1
    assert len(repo.users) == 1


def test_bootstrap_email_creates_admin_case_insensitively() -> None:
    repo = FakeUserRepository()
    service = ShellService(
        user_repo=repo, config=build_config(bootstrap_email="owner@example.com")
    )

    profile = service.ensure_profile(_identity(email="Owner@Example.com"))

    assert profile.role == UserRole.ADMIN


def test_stored_role_wins_over_bootstrap_email() -> None:
    existing = build_user("user-1", email="owner@example.com", role=UserRole.USER)
    repo = FakeUserRepository([existing])
    service = ShellService(
        user_repo=repo, config=build_config(bootstrap_email="owner@example.com")
    )

    profile = service.ensure_profile(_identity(email="owner@example.com"))

    assert profile.role == UserRole.USER
    assert repo.create_calls == 0


def test_shell_shows_admin_shortcuts_only_for_admins() -> None:
    service = ShellService(user_repo=FakeUserRepository(), config=build_config())

    user_view = service.build_shell(build_user(credits=12.5))
    admin_view = service.build_shell(build_user(role=UserRole.ADMIN))

    assert user_view.admin_shortcuts == []
    assert [a.label for a in admin_view.admin_shortcuts] == [
        "Manage Users",
        "View Orders",
        "Credit Requests",
        "Site Settings",
    ]
    assert [a.label for a in user_view.navigation] == [
        "Browse Products",
        "Buy Credits",
        "My Orders",
        "FAQ",
    ]


def test_shell_balance_is_formatted_and_converted_to_mmk() -> None:
    service = ShellService(user_repo=FakeUserRepository(), config=build_config())

    view = service.build_shell(build_user(name="Mya", credits=12.5))

    assert view.greeting_name == "Mya"
    assert view.credits_display == "12.50"
    assert view.balance_mmk == 1250
    menu = {a.id: a for a in view.user_menu}
    assert menu["my_profile"].notice == "Feature coming soon!"
    assert menu["contact_admin"].notice == "Feature coming soon!"
