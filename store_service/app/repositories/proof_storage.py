"""결제 증빙 이미지 저장소 (GridFS).

credit_requests.payment_proof_url 에는 `gridfs://payment_proofs/<ObjectId>` 형태의 참조가 저장된다.
"""

from __future__ import annotations

import gridfs
from bson import ObjectId
from gridfs.errors import NoFile
from pymongo.database import Database

from common.mongo.types import try_object_id

from .interfaces import ProofStorageInterface, StoredProof


PROOF_BUCKET_NAME = "payment_proofs"
PROOF_URL_PREFIX = f"gridfs://{PROOF_BUCKET_NAME}/"


def build_proof_url(file_id: str) -> str:
    return f"{PROOF_URL_PREFIX}{file_id}"


def parse_proof_url(proof_url: str) -> ObjectId | None:
    """참조 문자열에서 GridFS 파일 ObjectId 를 꺼낸다. 형식이 다르면 None."""

    if not proof_url or not proof_url.startswith(PROOF_URL_PREFIX):
        return None
    return try_object_id(proof_url[len(PROOF_URL_PREFIX) :])


class GridFSProofStorage(ProofStorageInterface):
    def __init__(self, database: Database) -> None:
        self._db = database
        self._bucket = gridfs.GridFSBucket(database, bucket_name=PROOF_BUCKET_NAME)

    def save(
        self,
        filename: str,
        content_type: str,
        data: bytes,
        user_id: str,
    ) -> str:
        file_id = self._bucket.upload_from_stream(
            filename,
            data,
            metadata={"content_type": content_type, "user_id": user_id},
        )
        return build_proof_url(str(file_id))

    def delete(self, file_id: str) -> None:
        oid = parse_proof_url(file_id)
        if oid is None:
            return
        try:
            self._bucket.delete(oid)
        except NoFile:
            # 이미 지워진 파일이면 할 일이 없다.
            return

    def load(self, file_id: str) -> StoredProof | None:
        oid = parse_proof_url(file_id)
        if oid is None:
            return None
        try:
            stream = self._bucket.open_download_stream(oid)
        except NoFile:
            return None

        metadata = stream.metadata or {}
        return StoredProof(
            filename=stream.filename,
            content_type=metadata.get("content_type") or "application/octet-stream",
            data=stream.read(),
        )
