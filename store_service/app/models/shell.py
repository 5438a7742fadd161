from __future__ import annotations

from pydantic import BaseModel


COMING_SOON_MESSAGE = "Feature coming soon!"


class ShellAction(BaseModel):
    """메인 화면의 버튼 하나.

    path 가 없으면 아직 준비되지 않은 기능이며 notice 를 보여준다.
    """

    id: str
    label: str
    description: str | None = None
    path: str | None = None
    notice: str | None = None


class ShellView(BaseModel):
    greeting_name: str
    email: str
    credits: float
    credits_display: str
    balance_mmk: int
    role: str
    is_admin: bool
    is_banned: bool
    navigation: list[ShellAction]
    user_menu: list[ShellAction]
    admin_shortcuts: list[ShellAction]


NAVIGATION_ACTIONS: tuple[ShellAction, ...] = (
    ShellAction(
        id="browse_products",
        label="Browse Products",
        description="View our catalog of digital goods.",
        path="/products",
    ),
    ShellAction(
        id="buy_credits",
        label="Buy Credits",
        description="Top up your account balance.",
        path="/buy-credits",
    ),
    ShellAction(
        id="my_orders",
        label="My Orders",
        description="Check your order history and status.",
        path="/my-orders",
    ),
    ShellAction(
        id="faq",
        label="FAQ",
        description="Find answers to common questions.",
        path="/faq",
    ),
)

USER_MENU_ACTIONS: tuple[ShellAction, ...] = (
    ShellAction(id="my_profile", label="My Profile", notice=COMING_SOON_MESSAGE),
    ShellAction(id="contact_admin", label="Contact Admin", notice=COMING_SOON_MESSAGE),
    ShellAction(id="sign_out", label="Sign Out", path="/api/v1/session/sign-out"),
)

ADMIN_SHORTCUTS: tuple[ShellAction, ...] = (
    ShellAction(id="manage_users", label="Manage Users", path="/admin"),
    ShellAction(id="view_orders", label="View Orders", path="/admin"),
    ShellAction(id="credit_requests", label="Credit Requests", path="/admin"),
    ShellAction(id="site_settings", label="Site Settings", notice=COMING_SOON_MESSAGE),
)
