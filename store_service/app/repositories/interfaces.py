from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from common.models.user import ListUsersFilter, User, UserRole

from ..config import CategorySeed, OperatorSeed, ProductSeed
from ..models.catalog import Category, Operator, ProductView
from ..models.credit_request import (
    CreditRequest,
    CreditRequestStatus,
    CreditRequestWithRequester,
    ResolveResult,
)
from ..models.order import AdminOrderView, Order, OrderStatus, OrderView


class UserRepositoryInterface(Protocol):
    """UserRepository 가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, Mongo 세부 구현은 몰라도 된다.
    """

    def find_by_user_id(
        self, user_id: str
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def create_if_absent(
        self, user: User
    ) -> tuple[User, bool]:  # pragma: no cover - Protocol
        """프로필을 만들고 (user, True) 를 반환한다.

        같은 user_id 가 이미 있으면 기존 프로필과 False 를 반환한다.
        """
        ...

    def list(
        self, flt: ListUsersFilter
    ) -> list[User]:  # pragma: no cover - Protocol
        ...

    def update_admin_fields(
        self,
        user_id: str,
        role: UserRole | None = None,
        is_banned: bool | None = None,
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def set_role_by_email(
        self, email: str, role: UserRole
    ) -> User | None:  # pragma: no cover - Protocol
        ...


class CreditRequestRepositoryInterface(Protocol):
    def insert(
        self, request: CreditRequest
    ) -> CreditRequest:  # pragma: no cover - Protocol
        ...

    def find_by_id(
        self, request_id: str
    ) -> CreditRequest | None:  # pragma: no cover - Protocol
        ...

    def list_by_user(
        self, user_id: str
    ) -> list[CreditRequest]:  # pragma: no cover - Protocol
        ...

    def list_with_requester(
        self,
    ) -> list[CreditRequestWithRequester]:  # pragma: no cover - Protocol
        ...

    def resolve(
        self,
        request_id: str,
        status: CreditRequestStatus,
        admin_notes: str | None,
        resolved_by: str,
    ) -> ResolveResult:  # pragma: no cover - Protocol
        """pending 요청을 status 로 전이한다. approved 면 같은 트랜잭션에서 잔액을 올린다.

        - 요청이 없으면 CreditRequestNotFoundError
        - 이미 처리된 요청이면 changed=False 와 현재 상태를 반환 (잔액 변화 없음)
        - 요청자 프로필이 없으면 UserNotFoundError (요청은 pending 으로 남는다)
        """
        ...


class OrderRepositoryInterface(Protocol):
    def list_by_user_with_product(
        self, user_id: str
    ) -> list[OrderView]:  # pragma: no cover - Protocol
        ...

    def list_for_admin(self) -> list[AdminOrderView]:  # pragma: no cover - Protocol
        ...

    def update_status(
        self, order_id: str, status: OrderStatus, admin_notes: str | None
    ) -> Order | None:  # pragma: no cover - Protocol
        ...


class CatalogRepositoryInterface(Protocol):
    def list_active_products(
        self,
    ) -> list[ProductView]:  # pragma: no cover - Protocol
        """활성 상품을 sort_order 순으로, 활성 operator/category 가 조인된 형태로 반환한다."""
        ...

    def find_active_product(
        self, product_id: str
    ) -> ProductView | None:  # pragma: no cover - Protocol
        ...

    def list_active_categories(
        self,
    ) -> list[Category]:  # pragma: no cover - Protocol
        ...

    def list_active_operators(
        self,
    ) -> list[Operator]:  # pragma: no cover - Protocol
        ...

    def upsert_operator(
        self, seed: OperatorSeed
    ) -> str:  # pragma: no cover - Protocol
        ...

    def upsert_category(
        self, seed: CategorySeed
    ) -> str:  # pragma: no cover - Protocol
        ...

    def upsert_product(
        self, seed: ProductSeed
    ) -> str:  # pragma: no cover - Protocol
        ...


class RevokedSessionRepositoryInterface(Protocol):
    def revoke(
        self, session_id: str, user_id: str, expires_at: datetime
    ) -> None:  # pragma: no cover - Protocol
        ...

    def is_revoked(self, session_id: str) -> bool:  # pragma: no cover - Protocol
        ...


@dataclass(slots=True)
class StoredProof:
    filename: str
    content_type: str
    data: bytes


class ProofStorageInterface(Protocol):
    """결제 증빙 이미지 저장소."""

    def save(
        self,
        filename: str,
        content_type: str,
        data: bytes,
        user_id: str,
    ) -> str:  # pragma: no cover - Protocol
        ...

    def delete(self, file_id: str) -> None:  # pragma: no cover - Protocol
        ...

    def load(self, file_id: str) -> StoredProof | None:  # pragma: no cover - Protocol
        ...
