from __future__ import annotations

import pytest
from pymongo.errors import PyMongoError

from store_service.app.exceptions import (
    BannedUserError,
    CreditRequestSubmissionError,
    InvalidInputError,
    MissingInformationError,
)
from store_service.app.models.credit_request import CreditRequestStatus, PaymentMethod
from store_service.app.services.credit_requests_service import (
    CreditRequestSubmission,
    CreditRequestsService,
    ProofUpload,
)
from store_service.tests.fakes import (
    FakeCreditRequestRepository,
    FakeProofStorage,
    FakeUserRepository,
    build_config,
    build_user,
)


PNG = ProofUpload(filename="proof.png", content_type="image/png", data=b"\x89PNG...")


def _service() -> tuple[CreditRequestsService, FakeCreditRequestRepository, FakeProofStorage]:
    users = FakeUserRepository([build_user()])
    repo = FakeCreditRequestRepository(users)
    storage = FakeProofStorage()
    service = CreditRequestsService(
        credit_request_repo=repo,
        proof_storage=storage,
        settings=build_config().store,
    )
    return service, repo, storage


def test_submit_creates_pending_request_with_mmk_total() -> None:
    service, repo, storage = _service()

    created = service.submit(
        build_user(),
        CreditRequestSubmission(
            credits="500", payment_method="kpay", proof=PNG, notes=" sent at 9am "
        ),
    )

    assert created.status == CreditRequestStatus.PENDING
    assert created.credits_requested == 500
    assert created.amount_mmk == 50000
    assert created.payment_method == PaymentMethod.KPAY
    assert created.user_notes == "sent at 9am"
    assert created.admin_notes is None
    assert created.payment_proof_url in storage.files
    assert list(repo.requests) == [created.id]


@pytest.mark.parametrize(
    "submission",
    [
        CreditRequestSubmission(credits=None, payment_method="kpay", proof=PNG),
        CreditRequestSubmission(credits="100", payment_method="", proof=PNG),
        CreditRequestSubmission(credits="100", payment_method="kpay", proof=None),
    ],
)
def test_submit_requires_credits_method_and_proof(
    submission: CreditRequestSubmission,
) -> None:
    service, repo, storage = _service()

    with pytest.raises(MissingInformationError) as excinfo:
        service.submit(build_user(), submission)

    assert excinfo.value.message == (
        "Please fill in all required fields and upload payment proof."
    )
    assert repo.requests == {}
    assert storage.files == {}


def test_submit_accepts_legacy_waypay_spelling() -> None:
    service, _, _ = _service()

    created = service.submit(
        build_user(),
        CreditRequestSubmission(credits="100", payment_method="WayPay", proof=PNG),
    )

    assert created.payment_method == PaymentMethod.WAVEPAY


@pytest.mark.parametrize(
    "submission",
    [
        CreditRequestSubmission(credits="-1", payment_method="kpay", proof=PNG),
        CreditRequestSubmission(credits="1.005", payment_method="kpay", proof=PNG),
        CreditRequestSubmission(credits="10", payment_method="cash", proof=PNG),
        CreditRequestSubmission(
            credits="10",
            payment_method="kpay",
            proof=ProofUpload(filename="a.pdf", content_type="application/pdf", data=b"%PDF"),
        ),
    ],
)
def test_submit_rejects_invalid_values(submission: CreditRequestSubmission) -> None:
    service, repo, _ = _service()

    with pytest.raises(InvalidInputError):
        service.submit(build_user(), submission)
    assert repo.requests == {}


def test_submit_rejects_oversized_proof() -> None:
    service, _, _ = _service()
    too_big = ProofUpload(
        filename="big.png",
        content_type="image/png",
        data=b"0" * (build_config().store.max_proof_bytes + 1),
    )

    with pytest.raises(InvalidInputError):
        service.submit(
            build_user(),
            CreditRequestSubmission(credits="10", payment_method="kpay", proof=too_big),
        )


def test_banned_user_cannot_submit() -> None:
    service, repo, _ = _service()

    with pytest.raises(BannedUserError):
        service.submit(
            build_user(is_banned=True),
            CreditRequestSubmission(credits="10", payment_method="kpay", proof=PNG),
        )
    assert repo.requests == {}


def test_failed_insert_removes_stored_proof() -> None:
    service, repo, storage = _service()
    repo.fail_insert = PyMongoError("write failed")

    with pytest.raises(CreditRequestSubmissionError):
        service.submit(
            build_user(),
            CreditRequestSubmission(credits="10", payment_method="kpay", proof=PNG),
        )

    assert storage.files == {}
    assert len(storage.deleted) == 1


def test_packages_carry_mmk_prices() -> None:
    service, _, _ = _service()

    packages = service.list_packages()

    assert [(p.credits, p.amount_mmk) for p in packages][2] == (500, 50000)
    assert [p.credits for p in packages if p.popular] == [500]


def test_list_my_requests_only_returns_callers_requests() -> None:
    service, _, _ = _service()
    mine = service.submit(
        build_user("user-1"),
        CreditRequestSubmission(credits="10", payment_method="kpay", proof=PNG),
    )
    service.submit(
        build_user("user-2"),
        CreditRequestSubmission(credits="20", payment_method="kpay", proof=PNG),
    )

    assert [r.id for r in service.list_my_requests("user-1")] == [mine.id]
