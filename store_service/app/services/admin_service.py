"""어드민 대시보드 비즈니스 로직.

권한 확인은 라우터 의존성(require_admin)에서 끝나고, 여기서는 actor 를 받아 기록과
자기 자신에 대한 변경 방지에만 쓴다.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from fastapi import Depends
from pymongo.errors import PyMongoError

from common.models.user import ListUsersFilter, User, UserRole

from ..exceptions import (
    CreditRequestAlreadyResolvedError,
    CreditRequestNotFoundError,
    InvalidInputError,
    OrderNotFoundError,
    ProofNotFoundError,
    SelfModificationError,
    StoreUnavailableError,
    UserNotFoundError,
    UserProfileMissingError,
)
from ..models.admin import AdminDashboard, DashboardSummary, ResolveOutcome
from ..models.credit_request import parse_decision
from ..models.order import Order, OrderStatus
from ..repositories.interfaces import (
    CreditRequestRepositoryInterface,
    OrderRepositoryInterface,
    ProofStorageInterface,
    StoredProof,
    UserRepositoryInterface,
)
from .credit_requests_service import get_credit_request_repository, get_proof_storage
from .orders_service import get_order_repository
from .shell_service import get_user_repository


logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        credit_request_repo: CreditRequestRepositoryInterface,
        order_repo: OrderRepositoryInterface,
        proof_storage: ProofStorageInterface,
    ) -> None:
        self._user_repo = user_repo
        self._credit_request_repo = credit_request_repo
        self._order_repo = order_repo
        self._proof_storage = proof_storage

    def get_dashboard(self) -> AdminDashboard:
        """세 목록은 서로 독립이라 동시에 읽는다. 하나라도 실패하면 전체가 실패한다."""

        with ThreadPoolExecutor(max_workers=3) as pool:
            requests_future = pool.submit(self._credit_request_repo.list_with_requester)
            orders_future = pool.submit(self._order_repo.list_for_admin)
            users_future = pool.submit(self._user_repo.list, ListUsersFilter())

            credit_requests = requests_future.result()
            orders = orders_future.result()
            users = users_future.result()

        summary = DashboardSummary(
            pending_credit_requests=sum(
                1 for item in credit_requests if item.request.is_pending
            ),
            pending_orders=sum(
                1 for item in orders if item.order.status == OrderStatus.PENDING
            ),
            total_users=len(users),
        )
        return AdminDashboard(
            credit_requests=credit_requests,
            orders=orders,
            users=users,
            summary=summary,
        )

    def list_users(self, flt: ListUsersFilter) -> list[User]:
        return self._user_repo.list(flt)

    def update_user(
        self,
        actor: User,
        user_id: str,
        role: UserRole | None = None,
        is_banned: bool | None = None,
    ) -> User:
        if role is None and is_banned is None:
            raise InvalidInputError("Nothing to update: provide role or is_banned.")

        if actor.user_id == user_id and (
            (role is not None and role != UserRole.ADMIN) or is_banned
        ):
            raise SelfModificationError()

        updated = self._user_repo.update_admin_fields(
            user_id, role=role, is_banned=is_banned
        )
        if updated is None:
            raise UserNotFoundError()

        logger.info(
            "user updated by admin",
            extra={
                "user_id": actor.user_id,
                "body": f"target={user_id} role={updated.role.value} banned={updated.is_banned}",
            },
        )
        return updated

    def resolve_credit_request(
        self,
        actor: User,
        request_id: str,
        decision: str,
        notes: str | None = None,
    ) -> ResolveOutcome:
        """pending 요청을 승인/거절한다.

        - 같은 결정으로 다시 호출하면 잔액 변화 없이 already_resolved=True 로 성공한다.
        - 다른 결정으로 다시 호출하면 CreditRequestAlreadyResolvedError.
        """

        try:
            status = parse_decision(decision)
        except ValueError as exc:
            raise InvalidInputError(
                "decision must be one of: approved, denied"
            ) from exc

        admin_notes = (notes or "").strip() or None
        try:
            result = self._credit_request_repo.resolve(
                request_id,
                status=status,
                admin_notes=admin_notes,
                resolved_by=actor.user_id,
            )
        except UserNotFoundError as exc:
            logger.error(
                "credit request owner profile is missing",
                extra={"user_id": actor.user_id, "body": request_id},
            )
            raise UserProfileMissingError() from exc
        except PyMongoError as exc:
            logger.exception(
                "failed to resolve credit request",
                extra={"user_id": actor.user_id, "body": request_id},
            )
            raise StoreUnavailableError() from exc

        if not result.changed:
            if result.request.status != status:
                raise CreditRequestAlreadyResolvedError(
                    f"Credit request has already been {result.request.status.value}."
                )
            return ResolveOutcome(request=result.request, already_resolved=True)

        logger.info(
            "credit request resolved",
            extra={
                "user_id": actor.user_id,
                "body": f"request={request_id} status={status.value} credited={result.credited}",
            },
        )
        return ResolveOutcome(
            request=result.request,
            already_resolved=False,
            credited=result.credited,
        )

    def update_order_status(
        self, order_id: str, status: OrderStatus, notes: str | None = None
    ) -> Order:
        updated = self._order_repo.update_status(
            order_id, status, (notes or "").strip() or None
        )
        if updated is None:
            raise OrderNotFoundError()
        return updated

    def load_proof(self, request_id: str) -> StoredProof:
        request = self._credit_request_repo.find_by_id(request_id)
        if request is None:
            raise CreditRequestNotFoundError()
        if not request.payment_proof_url:
            raise ProofNotFoundError()

        proof = self._proof_storage.load(request.payment_proof_url)
        if proof is None:
            raise ProofNotFoundError()
        return proof


def get_admin_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    credit_request_repo: CreditRequestRepositoryInterface = Depends(
        get_credit_request_repository
    ),
    order_repo: OrderRepositoryInterface = Depends(get_order_repository),
    proof_storage: ProofStorageInterface = Depends(get_proof_storage),
) -> AdminService:
    """FastAPI DI용 AdminService 팩토리."""

    return AdminService(
        user_repo=user_repo,
        credit_request_repo=credit_request_repo,
        order_repo=order_repo,
        proof_storage=proof_storage,
    )
