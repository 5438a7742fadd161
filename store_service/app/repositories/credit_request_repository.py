"""크레딧 충전 요청 레포지토리.

승인 처리는 요청 상태 전이, 잔액 증가, 원장 기록을 하나의 MongoDB 트랜잭션으로 묶는다.
상태 전이는 status=pending 조건부 갱신(compare-and-set)이라 같은 요청이 두 번 승인되지 않는다.
"""

from __future__ import annotations

from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.client_session import ClientSession
from pymongo.database import Database

from common.mongo.types import try_object_id

from ..exceptions import CreditRequestNotFoundError, UserNotFoundError
from ..models.credit_request import (
    CreditRequest,
    CreditRequestStatus,
    CreditRequestWithRequester,
    CreditTransaction,
    Requester,
    ResolveResult,
)
from .documents.credit_request_document import (
    CreditRequestDocument,
    CreditTransactionDocument,
)
from .interfaces import CreditRequestRepositoryInterface


TX_TYPE_CREDIT_REQUEST_APPROVED = "credit_request_approved"


class CreditRequestRepository(CreditRequestRepositoryInterface):
    """credit_requests 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["credit_requests"]
        self._users = database["users"]
        self._transactions = database["credit_transactions"]

    @staticmethod
    def _from_document(doc: dict) -> CreditRequest:
        return CreditRequestDocument.model_validate(doc).to_domain()

    def insert(self, request: CreditRequest) -> CreditRequest:
        now = datetime.now(timezone.utc)
        request.created_at = now
        request.updated_at = now

        payload = CreditRequestDocument.from_domain(request).to_mongo_record()
        result = self._col.insert_one(payload)
        payload["_id"] = result.inserted_id
        return self._from_document(payload)

    def find_by_id(self, request_id: str) -> CreditRequest | None:
        oid = try_object_id(request_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if not doc:
            return None
        return self._from_document(doc)

    def list_by_user(self, user_id: str) -> list[CreditRequest]:
        cursor = self._col.find(
            {"user_id": user_id},
            sort=[("created_at", -1), ("_id", -1)],
        )
        return [self._from_document(doc) for doc in cursor]

    def list_with_requester(self) -> list[CreditRequestWithRequester]:
        pipeline = [
            {"$sort": {"created_at": -1, "_id": -1}},
            {
                "$lookup": {
                    "from": "users",
                    "localField": "user_id",
                    "foreignField": "user_id",
                    "as": "requester",
                }
            },
        ]

        items: list[CreditRequestWithRequester] = []
        for doc in self._col.aggregate(pipeline):
            requester_docs = doc.pop("requester", None) or []
            requester = None
            if requester_docs:
                requester = Requester(
                    name=requester_docs[0].get("name", ""),
                    email=requester_docs[0].get("email", ""),
                )
            items.append(
                CreditRequestWithRequester(
                    request=self._from_document(doc),
                    requester=requester,
                )
            )
        return items

    def resolve(
        self,
        request_id: str,
        status: CreditRequestStatus,
        admin_notes: str | None,
        resolved_by: str,
    ) -> ResolveResult:
        oid = try_object_id(request_id)
        if oid is None:
            raise CreditRequestNotFoundError()

        def _callback(session: ClientSession) -> ResolveResult:
            return self._resolve_in_transaction(
                session, oid, status, admin_notes, resolved_by
            )

        with self._db.client.start_session() as session:
            return session.with_transaction(_callback)

    def _resolve_in_transaction(
        self,
        session: ClientSession,
        oid: ObjectId,
        status: CreditRequestStatus,
        admin_notes: str | None,
        resolved_by: str,
    ) -> ResolveResult:
        now = datetime.now(timezone.utc)

        doc = self._col.find_one_and_update(
            {"_id": oid, "status": CreditRequestStatus.PENDING.value},
            {
                "$set": {
                    "status": status.value,
                    "admin_notes": admin_notes,
                    "resolved_by": resolved_by,
                    "resolved_at": now,
                    "updated_at": now,
                }
            },
            return_document=ReturnDocument.AFTER,
            session=session,
        )

        if doc is None:
            existing = self._col.find_one({"_id": oid}, session=session)
            if existing is None:
                raise CreditRequestNotFoundError()
            return ResolveResult(request=self._from_document(existing), changed=False)

        request = self._from_document(doc)
        if status != CreditRequestStatus.APPROVED:
            return ResolveResult(request=request, changed=True)

        result = self._users.update_one(
            {"user_id": request.user_id},
            {
                "$inc": {"credits": request.credits_requested},
                "$set": {"updated_at": now},
            },
            session=session,
        )
        if result.matched_count == 0:
            # 예외로 트랜잭션이 abort 되어 요청은 pending 으로 남는다.
            raise UserNotFoundError(
                f"owner of credit request {request.id} has no profile"
            )

        tx = CreditTransaction(
            user_id=request.user_id,
            credit_request_id=request.id,
            type=TX_TYPE_CREDIT_REQUEST_APPROVED,
            amount=request.credits_requested,
            reason=f"credit request {request.id} approved by {resolved_by}",
            created_at=now,
            updated_at=now,
        )
        self._transactions.insert_one(
            CreditTransactionDocument.from_domain(tx).to_mongo_record(),
            session=session,
        )

        return ResolveResult(
            request=request,
            changed=True,
            credited=request.credits_requested,
        )
