from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def ensure_utc_datetime(value: Any) -> datetime:
    """Mongo 에서 읽은 datetime(또는 ISO 문자열)을 UTC aware datetime 으로 맞춘다.

    - 문자열이면 ISO8601 로 파싱한다.
    - tzinfo 가 없으면 UTC 로 간주한다.
    """

    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if not isinstance(value, datetime):
        raise ValueError(f"datetime expected, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_object_id(value: Any) -> ObjectId:
    """str / ObjectId 를 ObjectId 로 변환한다. 형식이 틀리면 InvalidId 가 발생한다."""

    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    return ObjectId(str(value))


def try_object_id(value: Any) -> ObjectId | None:
    """경로 파라미터처럼 외부 입력 ID 를 변환할 때 사용한다. 잘못된 값이면 None."""

    try:
        return to_object_id(value)
    except (InvalidId, TypeError):
        return None


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    if value is None:
        return None
    return str(value)


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[datetime, BeforeValidator(ensure_utc_datetime)]


class BaseDocument(BaseModel):
    """스토어 컬렉션 도큐먼트 공통 베이스 모델.

    - `_id` 는 id 필드로 alias 되어 ObjectId 로 다룬다.
    - created_at / updated_at 은 항상 UTC 로 정규화된다.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime
    updated_at: MongoDateTime

    @property
    def id_str(self) -> str | None:
        return from_object_id(self.id)

    def to_mongo_record(self) -> dict[str, Any]:
        """insert 에 쓰는 레코드로 직렬화한다.

        id 가 None 이면 `_id` 를 빼서 Mongo 가 ObjectId 를 생성하게 한다.
        다른 None 필드(admin_notes 등)는 null 로 저장되도록 남겨 둔다.
        """

        record = self.model_dump(by_alias=True)
        if record.get("_id") is None:
            record.pop("_id", None)
        return record


def build_document_data_from_domain(domain_model: BaseModel) -> dict[str, Any]:
    """도메인 모델을 도큐먼트 생성용 dict 로 변환한다.

    도메인 모델의 문자열 id 는 `_id` 로 옮기고, 없으면 제거한다.
    """

    data = domain_model.model_dump(by_alias=True)
    raw_id = data.pop("id", None)
    if raw_id is not None:
        data["_id"] = raw_id
    return data
