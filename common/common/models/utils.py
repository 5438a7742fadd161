from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def normalize_id_fields_to_str(data: Any, *, fields: list[str]) -> Any:
    """도큐먼트 dict 의 ObjectId 필드(id, product_id 등)를 문자열로 바꾼다.

    `_id` 키는 `id` 로 옮긴다. 입력이 Mapping 이 아니면 그대로 반환한다.
    """

    if not isinstance(data, Mapping):
        return data

    result: dict[str, Any] = dict(data)
    if "_id" in result and "id" not in result:
        result["id"] = result.pop("_id")

    for field in fields:
        value = result.get(field)
        if value is None or isinstance(value, str):
            continue
        result[field] = str(value)

    return result
