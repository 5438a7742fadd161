"""크레딧 충전 라우터.

증빙 이미지는 multipart 로 받는다 (credits, payment_method, proof, notes).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ...exceptions import StoreError
from ...models.pricing import CreditQuote
from ...models.session import Viewer
from ...services.credit_requests_service import (
    CreditRequestSubmission,
    CreditRequestsService,
    ProofUpload,
    get_credit_requests_service,
)
from ..dependencies import get_viewer
from ..errors import to_http_exception
from ..schemas.credits import (
    CreditOptionsResponse,
    CreditRequestCreatedResponse,
    CreditRequestResponse,
    ListCreditRequestsResponse,
)

router = APIRouter()


@router.get("/packages", response_model=CreditOptionsResponse, summary="충전 패키지")
def get_packages(
    service: Annotated[CreditRequestsService, Depends(get_credit_requests_service)],
) -> CreditOptionsResponse:
    return CreditOptionsResponse(
        credit_rate_mmk=service.rate_mmk,
        packages=service.list_packages(),
        payment_methods=service.list_payment_methods(),
    )


@router.get("/quote", response_model=CreditQuote, summary="충전 금액 계산")
def get_quote(
    credits: Annotated[str, Query(min_length=1)],
    service: Annotated[CreditRequestsService, Depends(get_credit_requests_service)],
) -> CreditQuote:
    try:
        return service.quote(credits)
    except StoreError as exc:
        raise to_http_exception(exc) from exc


@router.post(
    "/requests",
    response_model=CreditRequestCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="충전 요청 제출",
)
async def submit_credit_request(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[CreditRequestsService, Depends(get_credit_requests_service)],
    credits: Annotated[str | None, Form()] = None,
    payment_method: Annotated[str | None, Form()] = None,
    notes: Annotated[str | None, Form()] = None,
    proof: Annotated[UploadFile | None, File()] = None,
) -> CreditRequestCreatedResponse:
    upload = None
    if proof is not None and proof.filename:
        # 한도를 넘는 1 바이트까지만 읽는다. 초과분은 서비스 검증에서 거절된다.
        upload = ProofUpload(
            filename=proof.filename,
            content_type=proof.content_type or "",
            data=await proof.read(service.max_proof_bytes + 1),
        )

    submission = CreditRequestSubmission(
        credits=credits,
        payment_method=payment_method,
        proof=upload,
        notes=notes,
    )
    try:
        created = await run_in_threadpool(service.submit, viewer.profile, submission)
    except StoreError as exc:
        raise to_http_exception(exc) from exc
    return CreditRequestCreatedResponse(
        request=CreditRequestResponse.from_domain(created)
    )


@router.get(
    "/requests", response_model=ListCreditRequestsResponse, summary="내 충전 요청 목록"
)
def list_my_credit_requests(
    viewer: Annotated[Viewer, Depends(get_viewer)],
    service: Annotated[CreditRequestsService, Depends(get_credit_requests_service)],
) -> ListCreditRequestsResponse:
    requests = service.list_my_requests(viewer.user_id)
    return ListCreditRequestsResponse(
        total=len(requests),
        items=[CreditRequestResponse.from_domain(r) for r in requests],
    )
