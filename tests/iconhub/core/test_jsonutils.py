# tests/iconhub/core/test_jsonutils.py
from __future__ import annotations
import json
from pathlib import Path

from iconhub.core.jsonutils import safeJsonDumps, tryJSONify
from iconhub.icons.types import IconCollection


def test_safeJsonDumps_compactAndUnicode() -> None:
    out = safeJsonDumps({"name": "šipka", "n": [1, 2]})

    assert out == '{"name":"šipka","n":[1,2]}'


def test_safeJsonDumps_dumpsModelsWithExtras() -> None:
    collection = IconCollection(prefix="mdi", icons={"home": {"body": "<g/>"}}, width=24)

    assert json.loads(safeJsonDumps(collection)) == {
        "prefix": "mdi",
        "icons": {"home": {"body": "<g/>"}},
        "width": 24,
    }


def test_safeJsonDumps_fallsBackForUnknownTypes() -> None:
    out = json.loads(safeJsonDumps({"path": Path("src/icons"), "tags": {"b", "a"}}))

    assert out == {"path": "src/icons", "tags": ["a", "b"]}


def test_tryJSONify_breaksCycles() -> None:
    data: dict = {"a": 1}
    data["self"] = data

    out = tryJSONify(data)

    assert out["a"] == 1
    assert out["self"].startswith("<cycle")


def test_tryJSONify_exceptions() -> None:
    out = tryJSONify(ValueError("bad icon"))

    assert out["type"] == "ValueError"
    assert out["message"] == "bad icon"
