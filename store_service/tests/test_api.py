from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from common.models.user import UserRole

from store_service.app.api.v1.admin import content_disposition
from store_service.app.config import get_app_config
from store_service.app.main import create_app
from store_service.app.models.credit_request import CreditRequest, PaymentMethod
from store_service.app.models.order import Order, OrderView
from store_service.app.services.auth_service import get_identity_provider
from store_service.app.services.credit_requests_service import (
    get_credit_request_repository,
    get_proof_storage,
)
from store_service.app.services.orders_service import get_order_repository
from store_service.app.services.products_service import get_catalog_repository
from store_service.app.services.shell_service import get_user_repository
from store_service.tests.fakes import (
    BASE_TIME,
    FakeCatalogRepository,
    FakeCreditRequestRepository,
    FakeIdentityProvider,
    FakeOrderRepository,
    FakeProofStorage,
    FakeUserRepository,
    build_config,
    build_session,
    build_user,
)


USER_TOKEN = "user-token"
ADMIN_TOKEN = "admin-token"


@dataclass
class ApiFixture:
    client: TestClient
    users: FakeUserRepository
    requests: FakeCreditRequestRepository
    orders: FakeOrderRepository
    proofs: FakeProofStorage
    identity: FakeIdentityProvider


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api() -> ApiFixture:
    users = FakeUserRepository(
        [build_user("admin-1", email="owner@example.com", role=UserRole.ADMIN)]
    )
    requests = FakeCreditRequestRepository(users)
    orders = FakeOrderRepository()
    proofs = FakeProofStorage()
    identity = FakeIdentityProvider(
        [
            build_session("user-1", token=USER_TOKEN, name="Mya"),
            build_session("admin-1", email="owner@example.com", token=ADMIN_TOKEN),
        ]
    )

    app = create_app()
    app.dependency_overrides[get_identity_provider] = lambda: identity
    app.dependency_overrides[get_user_repository] = lambda: users
    app.dependency_overrides[get_credit_request_repository] = lambda: requests
    app.dependency_overrides[get_order_repository] = lambda: orders
    app.dependency_overrides[get_proof_storage] = lambda: proofs
    app.dependency_overrides[get_catalog_repository] = lambda: FakeCatalogRepository()
    app.dependency_overrides[get_app_config] = lambda: build_config()

    return ApiFixture(
        client=TestClient(app),
        users=users,
        requests=requests,
        orders=orders,
        proofs=proofs,
        identity=identity,
    )


def test_gate_without_session_points_to_login(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/session")

    assert res.status_code == 200
    assert res.json()["view"] == "login"
    assert res.json()["user"] is None


def test_gate_with_bad_token_points_to_login(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/session", headers=_auth("forged"))

    assert res.json()["view"] == "login"


def test_gate_with_session_points_to_shell(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/session", headers=_auth(USER_TOKEN))

    body = res.json()
    assert body["view"] == "shell"
    assert body["user"]["id"] == "user-1"


def test_shell_requires_session(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/shell")

    assert res.status_code == 401
    assert res.json()["detail"]["code"] == "unauthenticated"


def test_shell_creates_profile_on_first_visit(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/shell", headers=_auth(USER_TOKEN))

    assert res.status_code == 200
    body = res.json()
    assert body["greeting_name"] == "Mya"
    assert body["credits_display"] == "0.00"
    assert body["is_admin"] is False
    assert body["admin_shortcuts"] == []
    assert "user-1" in api.users.users


def test_sign_out_revokes_session(api: ApiFixture) -> None:
    res = api.client.post("/api/v1/session/sign-out", headers=_auth(USER_TOKEN))

    assert res.status_code == 200
    assert api.identity.signed_out == [f"session-{USER_TOKEN}"]
    follow_up = api.client.get("/api/v1/session", headers=_auth(USER_TOKEN))
    assert follow_up.json()["view"] == "login"


def test_sign_out_failure_returns_error(api: ApiFixture) -> None:
    api.identity.fail_sign_out = True

    res = api.client.post("/api/v1/session/sign-out", headers=_auth(USER_TOKEN))

    assert res.status_code == 502
    assert res.json()["detail"]["code"] == "sign_out_failed"


def test_quote_for_500_credits(api: ApiFixture) -> None:
    res = api.client.get(
        "/api/v1/credits/quote", params={"credits": "500"}, headers=_auth(USER_TOKEN)
    )

    assert res.status_code == 200
    assert res.json() == {"credits": "500", "amount_mmk": 50000}


def test_packages_list_methods_and_rate(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/credits/packages")

    body = res.json()
    assert body["credit_rate_mmk"] == 100
    assert [m["name"] for m in body["payment_methods"]] == ["KPay", "WavePay"]


def test_submit_credit_request(api: ApiFixture) -> None:
    res = api.client.post(
        "/api/v1/credits/requests",
        headers=_auth(USER_TOKEN),
        data={"credits": "250", "payment_method": "wavepay", "notes": "paid"},
        files={"proof": ("proof.png", b"\x89PNG", "image/png")},
    )

    assert res.status_code == 201
    request = res.json()["request"]
    assert request["status"] == "pending"
    assert request["amount_mmk"] == 25000
    assert request["user_notes"] == "paid"
    assert request["proof_url"] == f"/api/v1/admin/credit-requests/{request['id']}/proof"

    mine = api.client.get("/api/v1/credits/requests", headers=_auth(USER_TOKEN))
    assert [r["id"] for r in mine.json()["items"]] == [request["id"]]


def test_submit_without_proof_is_missing_information(api: ApiFixture) -> None:
    res = api.client.post(
        "/api/v1/credits/requests",
        headers=_auth(USER_TOKEN),
        data={"credits": "250", "payment_method": "kpay"},
    )

    assert res.status_code == 422
    assert res.json()["detail"] == {
        "code": "missing_information",
        "message": "Please fill in all required fields and upload payment proof.",
    }
    assert api.requests.requests == {}


def test_faq_is_public(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/faq")

    assert res.status_code == 200
    assert len(res.json()["items"]) == 12


def test_my_orders_returns_only_callers_orders(api: ApiFixture) -> None:
    for oid, user_id, hours in (("o1", "user-1", 0), ("o2", "admin-1", 1), ("o3", "user-1", 2)):
        ts = BASE_TIME + timedelta(hours=hours)
        api.orders.views.append(
            OrderView(
                order=Order(
                    id=oid,
                    user_id=user_id,
                    product_id="p1",
                    phone_number="09123456789",
                    price_credits=10,
                    status="approved",
                    created_at=ts,
                    updated_at=ts,
                )
            )
        )

    res = api.client.get("/api/v1/orders/me", headers=_auth(USER_TOKEN))

    items = res.json()["items"]
    assert [o["id"] for o in items] == ["o3", "o1"]
    assert {o["status"] for o in items} == {"processing"}


def test_admin_routes_reject_regular_users(api: ApiFixture) -> None:
    res = api.client.get("/api/v1/admin/dashboard", headers=_auth(USER_TOKEN))

    assert res.status_code == 403
    assert res.json()["detail"] == {
        "code": "access_denied",
        "message": "You don't have admin privileges.",
    }


def test_admin_approves_request_once(api: ApiFixture) -> None:
    api.users.users["user-1"] = build_user("user-1", credits=5.0)
    request = api.requests.add(
        CreditRequest(
            user_id="user-1",
            credits_requested=100,
            amount_mmk=10000,
            payment_method=PaymentMethod.KPAY,
            created_at=BASE_TIME,
            updated_at=BASE_TIME,
        )
    )
    url = f"/api/v1/admin/credit-requests/{request.id}/resolve"

    first = api.client.post(url, json={"decision": "approved"}, headers=_auth(ADMIN_TOKEN))
    second = api.client.post(url, json={"decision": "approved"}, headers=_auth(ADMIN_TOKEN))
    conflict = api.client.post(url, json={"decision": "denied"}, headers=_auth(ADMIN_TOKEN))

    assert first.status_code == 200
    assert first.json()["already_resolved"] is False
    assert first.json()["credited"] == 100
    assert second.status_code == 200
    assert second.json()["already_resolved"] is True
    assert conflict.status_code == 409
    assert conflict.json()["detail"]["code"] == "already_resolved"
    assert api.users.users["user-1"].credits == 105.0


def test_admin_dashboard_and_user_filter(api: ApiFixture) -> None:
    api.users.users["user-1"] = build_user("user-1", name="Mya", is_banned=True)

    dashboard = api.client.get("/api/v1/admin/dashboard", headers=_auth(ADMIN_TOKEN))
    banned = api.client.get(
        "/api/v1/admin/users", params={"banned": "true"}, headers=_auth(ADMIN_TOKEN)
    )

    assert dashboard.status_code == 200
    assert dashboard.json()["summary"]["total_users"] == 2
    assert [u["user_id"] for u in banned.json()["items"]] == ["user-1"]


def test_admin_cannot_demote_self(api: ApiFixture) -> None:
    res = api.client.patch(
        "/api/v1/admin/users/admin-1", json={"role": "user"}, headers=_auth(ADMIN_TOKEN)
    )

    assert res.status_code == 409


def test_admin_order_update_rejects_unknown_status(api: ApiFixture) -> None:
    res = api.client.patch(
        "/api/v1/admin/orders/o1", json={"status": "shipped"}, headers=_auth(ADMIN_TOKEN)
    )

    assert res.status_code == 422


def test_store_outage_maps_to_503(api: ApiFixture) -> None:
    def broken_list(flt):
        raise ServerSelectionTimeoutError("no primary")

    api.users.list = broken_list  # type: ignore[method-assign]

    res = api.client.get("/api/v1/admin/users", headers=_auth(ADMIN_TOKEN))

    assert res.status_code == 503
    assert res.json()["detail"]["code"] == "store_unavailable"


def test_admin_downloads_proof_with_burmese_filename(api: ApiFixture) -> None:
    filename = "ငွေလွှဲ.png"
    created = api.client.post(
        "/api/v1/credits/requests",
        headers=_auth(USER_TOKEN),
        data={"credits": "500", "payment_method": "kpay"},
        files={"proof": (filename, b"\x89PNG-bytes", "image/png")},
    )
    assert created.status_code == 201
    proof_path = created.json()["request"]["proof_url"]

    res = api.client.get(proof_path, headers=_auth(ADMIN_TOKEN))

    assert res.status_code == 200
    assert res.content == b"\x89PNG-bytes"
    assert res.headers["content-type"] == "image/png"
    disposition = res.headers["content-disposition"]
    assert disposition.startswith('inline; filename=".png"; ')
    assert disposition.endswith(f"filename*=UTF-8''{quote(filename, safe='')}")


def test_proof_download_is_admin_only(api: ApiFixture) -> None:
    created = api.client.post(
        "/api/v1/credits/requests",
        headers=_auth(USER_TOKEN),
        data={"credits": "100", "payment_method": "kpay"},
        files={"proof": ("proof.png", b"\x89PNG", "image/png")},
    )

    res = api.client.get(created.json()["request"]["proof_url"], headers=_auth(USER_TOKEN))

    assert res.status_code == 403


def test_content_disposition_strips_quotes_and_line_breaks() -> None:
    value = content_disposition('bad"name\r\n.png')

    assert value == (
        'inline; filename="badname.png"; '
        "filename*=UTF-8''bad%22name%0D%0A.png"
    )
    assert "\r" not in value and "\n" not in value


def test_oversized_proof_is_rejected_before_storage(api: ApiFixture) -> None:
    config = build_config()
    config.store.max_proof_bytes = 16
    api.client.app.dependency_overrides[get_app_config] = lambda: config

    res = api.client.post(
        "/api/v1/credits/requests",
        headers=_auth(USER_TOKEN),
        data={"credits": "100", "payment_method": "kpay"},
        files={"proof": ("big.png", b"0" * 1024, "image/png")},
    )

    assert res.status_code == 422
    assert res.json()["detail"]["code"] == "invalid_input"
    assert api.proofs.files == {}
    assert api.requests.requests == {}
