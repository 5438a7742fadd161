from __future__ import annotations


class StoreError(Exception):
    """Base exception for all store-service errors."""

    code = "store_error"

    def __init__(self, message: str | None = None) -> None:
        # 메시지를 안 주면 클래스 docstring 이 사용자 노출 메시지가 된다.
        self.message = message or (type(self).__doc__ or self.code).strip()
        super().__init__(self.message)


class NotFoundError(StoreError):
    code = "not_found"


class UserNotFoundError(NotFoundError):
    """User profile not found."""

    code = "user_not_found"


class CreditRequestNotFoundError(NotFoundError):
    """Credit request not found."""

    code = "credit_request_not_found"


class OrderNotFoundError(NotFoundError):
    """Order not found."""

    code = "order_not_found"


class ProductNotFoundError(NotFoundError):
    """Product not found."""

    code = "product_not_found"


class ProofNotFoundError(NotFoundError):
    """Payment proof not found."""

    code = "proof_not_found"


class AccessDeniedError(StoreError):
    """You don't have admin privileges."""

    code = "access_denied"


class BannedUserError(AccessDeniedError):
    """This account has been banned."""

    code = "user_banned"


class InvalidInputError(StoreError):
    """Invalid input."""

    code = "invalid_input"


class MissingInformationError(InvalidInputError):
    """Please fill in all required fields and upload payment proof."""

    code = "missing_information"


class ConflictError(StoreError):
    code = "conflict"


class CreditRequestAlreadyResolvedError(ConflictError):
    """Credit request has already been resolved."""

    code = "already_resolved"


class StoreUnavailableError(StoreError):
    """Data store is temporarily unavailable. Please try again."""

    code = "store_unavailable"


class SignOutError(StoreError):
    """Error signing out."""

    code = "sign_out_failed"


class CreditRequestSubmissionError(StoreError):
    """Failed to submit credit request. Please try again."""

    code = "submission_failed"


class SelfModificationError(ConflictError):
    """You cannot demote or ban your own account."""

    code = "self_modification"


class UserProfileMissingError(ConflictError):
    """The requester's profile no longer exists."""

    code = "requester_missing"
