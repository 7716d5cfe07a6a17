from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python


def encode_meta_value(value: Any) -> str | None:
    """Text form of a meta value as stored in `meta_value`.

    Booleans follow the WordPress convention of "1" and "".
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(to_jsonable_python(value), ensure_ascii=False)


__all__ = ["encode_meta_value"]
