from __future__ import annotations

from bson import ObjectId

from store_service.app.repositories.proof_storage import build_proof_url, parse_proof_url


def test_proof_reference_points_to_gridfs_file() -> None:
    file_id = ObjectId()

    ref = build_proof_url(str(file_id))

    assert ref == f"gridfs://payment_proofs/{file_id}"
    assert parse_proof_url(ref) == file_id


def test_foreign_or_broken_references_are_ignored() -> None:
    assert parse_proof_url("https://example.com/proof.png") is None
    assert parse_proof_url("gridfs://payment_proofs/not-an-object-id") is None
    assert parse_proof_url("") is None
