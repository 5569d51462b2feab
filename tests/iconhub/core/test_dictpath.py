# tests/iconhub/core/test_dictpath.py
from __future__ import annotations

import pytest

from iconhub.core.dictpath import splitPath, getByPath, setByPath, hasPath, deleteByPath


# ----------------------------------------
# splitPath
# ----------------------------------------

def test_splitPath_plainAndEscapedSegments() -> None:
    assert splitPath("icons.include.mdi") == ["icons", "include", "mdi"]
    assert splitPath(r"icons.include.a\.b") == ["icons", "include", "a.b"]


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a.", "a\\"])
def test_splitPath_rejectsInvalidPaths(path: str) -> None:
    with pytest.raises(ValueError):
        splitPath(path)


# ----------------------------------------
# getByPath / hasPath
# ----------------------------------------

def test_getByPath_simpleNestedDict() -> None:
    data = {"icons": {"registry": {"retries": 3}}}

    assert getByPath(data, "icons.registry.retries") == 3
    assert getByPath(data, "icons.registry.apiUrl", "none") == "none"


def test_getByPath_nonMappingHopReturnsDefault() -> None:
    data = {"icons": {"iconDir": "src/icons"}}

    assert getByPath(data, "icons.iconDir.deeper", 42) == 42


def test_getByPath_invalidPathReturnsDefault() -> None:
    assert getByPath({"a": 1}, "a..b", "fallback") == "fallback"


def test_hasPath_distinguishesNoneFromMissing() -> None:
    data = {"logging": {"file": None}}

    assert hasPath(data, "logging.file") is True
    assert hasPath(data, "logging.level") is False


# ----------------------------------------
# setByPath
# ----------------------------------------

def test_setByPath_createsIntermediateDicts() -> None:
    data: dict = {}

    setByPath(data, "icons.registry.apiUrl", "https://api.example", createIfMissing=True)

    assert data == {"icons": {"registry": {"apiUrl": "https://api.example"}}}


def test_setByPath_missingHopRaisesWithoutCreate() -> None:
    with pytest.raises(KeyError):
        setByPath({}, "icons.iconDir", "x")


def test_setByPath_nonMappingHopRaisesTypeError() -> None:
    data = {"icons": "oops"}

    with pytest.raises(TypeError):
        setByPath(data, "icons.iconDir", "x", createIfMissing=True)


# ----------------------------------------
# deleteByPath
# ----------------------------------------

def test_deleteByPath_prunesEmptiedParents() -> None:
    data = {"icons": {"registry": {"apiUrl": "x"}}, "debug": {"devModeEnabled": True}}

    assert deleteByPath(data, "icons.registry.apiUrl") is True
    assert data == {"debug": {"devModeEnabled": True}}


def test_deleteByPath_keepsParentsWhenAsked() -> None:
    data = {"icons": {"registry": {"apiUrl": "x"}}}

    assert deleteByPath(data, "icons.registry.apiUrl", pruneEmptyParents=False) is True
    assert data == {"icons": {"registry": {}}}


def test_deleteByPath_missingReturnsFalse() -> None:
    data = {"icons": {}}

    assert deleteByPath(data, "icons.registry.apiUrl") is False
    assert deleteByPath(data, "icons.include") is False
    assert data == {"icons": {}}
