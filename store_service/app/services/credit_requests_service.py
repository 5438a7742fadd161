"""크레딧 충전(Buy Credits) 비즈니스 로직.

흐름: 패키지/금액 선택 -> 결제수단 선택 -> 송금 -> 증빙 업로드 -> pending 요청 생성.
실제 잔액 반영은 어드민 승인 시점에 AdminService 에서 일어난다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from fastapi import Depends
from pymongo.database import Database
from pymongo.errors import PyMongoError

from common.models.user import User
from common.mongo.client import get_database

from ..config import AppConfig, StoreSettings, get_app_config
from ..exceptions import (
    BannedUserError,
    CreditRequestSubmissionError,
    InvalidInputError,
    MissingInformationError,
)
from ..models.credit_request import CreditRequest, parse_payment_method
from ..models.pricing import (
    CreditPackage,
    CreditQuote,
    PaymentMethodInfo,
    credits_to_mmk,
    parse_credits,
    quote,
)
from ..repositories.credit_request_repository import CreditRequestRepository
from ..repositories.interfaces import (
    CreditRequestRepositoryInterface,
    ProofStorageInterface,
)
from ..repositories.proof_storage import GridFSProofStorage


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProofUpload:
    """업로드된 결제 증빙 파일."""

    filename: str
    content_type: str
    data: bytes


@dataclass(slots=True)
class CreditRequestSubmission:
    """폼 입력 그대로의 값. 비어 있는 항목은 None."""

    credits: str | None
    payment_method: str | None
    proof: ProofUpload | None
    notes: str | None = None


class CreditRequestsService:
    def __init__(
        self,
        credit_request_repo: CreditRequestRepositoryInterface,
        proof_storage: ProofStorageInterface,
        settings: StoreSettings,
    ) -> None:
        self._credit_request_repo = credit_request_repo
        self._proof_storage = proof_storage
        self._settings = settings

    @property
    def rate_mmk(self) -> int:
        return self._settings.credit_rate_mmk

    @property
    def max_proof_bytes(self) -> int:
        return self._settings.max_proof_bytes

    def list_packages(self) -> list[CreditPackage]:
        return [
            CreditPackage(
                credits=pkg.credits,
                amount_mmk=credits_to_mmk(pkg.credits, self.rate_mmk),
                popular=pkg.popular,
            )
            for pkg in self._settings.packages
        ]

    def list_payment_methods(self) -> list[PaymentMethodInfo]:
        return [
            PaymentMethodInfo(
                id=m.id,
                name=m.name,
                description=m.description,
                instructions=m.instructions,
            )
            for m in self._settings.payment_methods
        ]

    def quote(self, credits: str) -> CreditQuote:
        try:
            amount = parse_credits(credits)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc
        return quote(amount, self.rate_mmk)

    def _validate_proof(self, proof: ProofUpload) -> None:
        if not proof.data:
            raise MissingInformationError()
        if not (proof.content_type or "").lower().startswith("image/"):
            raise InvalidInputError("Payment proof must be an image file.")
        if len(proof.data) > self._settings.max_proof_bytes:
            raise InvalidInputError(
                f"Payment proof must be at most {self._settings.max_proof_bytes} bytes."
            )

    def submit(
        self, profile: User, submission: CreditRequestSubmission
    ) -> CreditRequest:
        credits_raw = (submission.credits or "").strip()
        method_raw = (submission.payment_method or "").strip()
        if not credits_raw or not method_raw or submission.proof is None:
            raise MissingInformationError()

        if profile.is_banned:
            raise BannedUserError()

        try:
            amount = parse_credits(credits_raw)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        try:
            method = parse_payment_method(method_raw)
        except ValueError as exc:
            raise InvalidInputError(f"Unknown payment method: {method_raw}") from exc

        self._validate_proof(submission.proof)

        try:
            proof_url = self._proof_storage.save(
                filename=submission.proof.filename,
                content_type=submission.proof.content_type,
                data=submission.proof.data,
                user_id=profile.user_id,
            )
        except PyMongoError as exc:
            logger.exception(
                "failed to store payment proof", extra={"user_id": profile.user_id}
            )
            raise CreditRequestSubmissionError() from exc

        now = datetime.now(timezone.utc)
        request = CreditRequest(
            user_id=profile.user_id,
            credits_requested=float(amount),
            amount_mmk=credits_to_mmk(amount, self.rate_mmk),
            payment_method=method,
            payment_proof_url=proof_url,
            user_notes=(submission.notes or "").strip() or None,
            created_at=now,
            updated_at=now,
        )

        try:
            created = self._credit_request_repo.insert(request)
        except PyMongoError as exc:
            logger.exception(
                "failed to insert credit request", extra={"user_id": profile.user_id}
            )
            try:
                self._proof_storage.delete(proof_url)
            except PyMongoError:
                logger.exception(
                    "failed to clean up payment proof",
                    extra={"user_id": profile.user_id, "body": proof_url},
                )
            raise CreditRequestSubmissionError() from exc

        logger.info(
            "credit request submitted",
            extra={"user_id": profile.user_id, "body": created.id},
        )
        return created

    def list_my_requests(self, user_id: str) -> list[CreditRequest]:
        return self._credit_request_repo.list_by_user(user_id)


def get_credit_request_repository(
    db: Database = Depends(get_database),
) -> CreditRequestRepositoryInterface:
    """FastAPI DI용 CreditRequestRepository 팩토리."""

    return CreditRequestRepository(db)


def get_proof_storage(
    db: Database = Depends(get_database),
) -> ProofStorageInterface:
    """FastAPI DI용 결제 증빙 저장소 팩토리."""

    return GridFSProofStorage(db)


def get_credit_requests_service(
    credit_request_repo: CreditRequestRepositoryInterface = Depends(
        get_credit_request_repository
    ),
    proof_storage: ProofStorageInterface = Depends(get_proof_storage),
    config: AppConfig = Depends(get_app_config),
) -> CreditRequestsService:
    """FastAPI DI용 CreditRequestsService 팩토리."""

    return CreditRequestsService(
        credit_request_repo=credit_request_repo,
        proof_storage=proof_storage,
        settings=config.store,
    )
