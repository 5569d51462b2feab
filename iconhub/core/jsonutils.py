# iconhub/core/jsonutils.py
from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel

__all__ = ["safeJsonDumps", "tryJSONify"]

_SEPARATORS = (",", ":")



def safeJsonDumps(obj: object) -> str:
    """
    Compact JSON text for module bodies and log records.

    Output is deterministic for equal input: no whitespace, non-ASCII kept,
    NaN/Infinity rejected. Pydantic models are dumped in JSON mode by alias,
    None fields left out. Anything json cannot encode goes through tryJSONify.
    """
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=_SEPARATORS)
    except (TypeError, ValueError):
        return json.dumps(tryJSONify(obj, _maxDepth=None), ensure_ascii=False, allow_nan=False, separators=_SEPARATORS)



def tryJSONify(obj: Any, *, _seen: frozenset[int] = frozenset(), _depth: int = 0, _maxDepth: int | None = 10) -> Any:
    """
    Best-effort conversion into plain JSON values.

    Models, dataclasses and mappings become dicts, paths become POSIX strings,
    dates become ISO strings, sets become sorted lists, exceptions become
    {"type", "message"}. Whatever is left ends up as repr(). Reference cycles
    and nesting deeper than _maxDepth (None: unlimited) are replaced by markers.
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, BaseException):
        return {"type": type(obj).__name__, "message": str(obj)}
    if isinstance(obj, PurePath):
        return obj.as_posix()
    if isinstance(obj, date):
        return obj.isoformat()

    if id(obj) in _seen:
        return f"<cycle {type(obj).__name__}>"
    if _maxDepth is not None and _depth > _maxDepth:
        return f"<too deep {type(obj).__name__}>"

    def again(value: Any) -> Any:
        return tryJSONify(value, _seen=_seen | {id(obj)}, _depth=_depth + 1, _maxDepth=_maxDepth)

    if isinstance(obj, Enum):
        return again(obj.value)
    if isinstance(obj, BaseModel):
        return again(obj.model_dump(mode="json", exclude_none=True))
    if is_dataclass(obj) and not isinstance(obj, type):
        return again(asdict(obj))
    if isinstance(obj, Mapping):
        return {str(key): again(value) for key, value in obj.items()}
    if isinstance(obj, (set, frozenset)):
        try:
            items = sorted(obj)
        except TypeError:
            items = list(obj)
        return [again(value) for value in items]
    if isinstance(obj, Iterable) and not isinstance(obj, (bytes, bytearray)):
        return [again(value) for value in obj]
    return repr(obj)
