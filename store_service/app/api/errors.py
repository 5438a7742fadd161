"""도메인 예외 -> HTTPException 변환."""

from __future__ import annotations

from fastapi import HTTPException, status

from ..exceptions import (
    AccessDeniedError,
    ConflictError,
    CreditRequestSubmissionError,
    InvalidInputError,
    NotFoundError,
    SignOutError,
    StoreError,
    StoreUnavailableError,
)


_STATUS_BY_ERROR: tuple[tuple[type[StoreError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (InvalidInputError, 422),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (CreditRequestSubmissionError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (SignOutError, status.HTTP_502_BAD_GATEWAY),
)


def error_detail(exc: StoreError) -> dict[str, str]:
    return {"code": exc.code, "message": exc.message}


def to_http_exception(exc: StoreError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=error_detail(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail(exc),
    )
