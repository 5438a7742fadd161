"""어드민 대시보드 라우터. 모든 엔드포인트는 require_admin 을 거친다."""

from __future__ import annotations

from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response

from common.models.user import ListUsersFilter, UserRole

from ...exceptions import StoreError
from ...models.session import Viewer
from ...services.admin_service import AdminService, get_admin_service
from ..dependencies import require_admin
from ..errors import to_http_exception
from ..schemas.admin import (
    AdminDashboardResponse,
    ResolveCreditRequestBody,
    ResolveCreditRequestResponse,
    UpdateOrderStatusBody,
)
from ..schemas.orders import OrderResponse
from ..schemas.users import ListUsersResponse, UpdateUserRequest, UserProfileResponse

router = APIRouter()


def content_disposition(filename: str) -> str:
    """업로드 파일명으로 inline Content-Disposition 헤더 값을 만든다.

    헤더는 latin-1 로만 인코딩되므로 filename 에는 ASCII 만 남기고,
    원래 이름은 filename* (UTF-8 percent-encoding) 으로 전달한다.
    """

    fallback = "".join(
        ch for ch in filename if 32 <= ord(ch) < 127 and ch not in '"\\'
    ).strip()
    return (
        f'inline; filename="{fallback or "proof"}"; '
        f"filename*=UTF-8''{quote(filename, safe='')}"
    )


@router.get("/dashboard", response_model=AdminDashboardResponse, summary="대시보드")
def get_dashboard(
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> AdminDashboardResponse:
    return AdminDashboardResponse.from_domain(service.get_dashboard())


@router.get("/users", response_model=ListUsersResponse, summary="유저 목록/검색")
def list_users(
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
    q: Annotated[str | None, Query()] = None,
    role: Annotated[UserRole | None, Query()] = None,
    banned: Annotated[bool | None, Query()] = None,
) -> ListUsersResponse:
    users = service.list_users(ListUsersFilter(query=q, role=role, is_banned=banned))
    return ListUsersResponse(
        total=len(users),
        items=[UserProfileResponse.from_domain(u) for u in users],
    )


@router.patch(
    "/users/{user_id}", response_model=UserProfileResponse, summary="역할/차단 변경"
)
def update_user(
    user_id: str,
    body: UpdateUserRequest,
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> UserProfileResponse:
    try:
        updated = service.update_user(
            admin.profile, user_id, role=body.role, is_banned=body.is_banned
        )
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return UserProfileResponse.from_domain(updated)


@router.post(
    "/credit-requests/{request_id}/resolve",
    response_model=ResolveCreditRequestResponse,
    summary="충전 요청 승인/거절",
)
def resolve_credit_request(
    request_id: str,
    body: ResolveCreditRequestBody,
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> ResolveCreditRequestResponse:
    try:
        outcome = service.resolve_credit_request(
            admin.profile, request_id, body.decision, body.notes
        )
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return ResolveCreditRequestResponse.from_domain(outcome)


@router.get("/credit-requests/{request_id}/proof", summary="결제 증빙 다운로드")
def get_credit_request_proof(
    request_id: str,
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> Response:
    try:
        proof = service.load_proof(request_id)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return Response(
        content=proof.data,
        media_type=proof.content_type,
        headers={"Content-Disposition": content_disposition(proof.filename)},
    )


@router.patch("/orders/{order_id}", response_model=OrderResponse, summary="주문 상태 변경")
def update_order_status(
    order_id: str,
    body: UpdateOrderStatusBody,
    admin: Annotated[Viewer, Depends(require_admin)],
    service: Annotated[AdminService, Depends(get_admin_service)],
) -> OrderResponse:
    try:
        updated = service.update_order_status(order_id, body.status, body.notes)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return OrderResponse.from_domain(updated)
