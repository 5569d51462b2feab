# tests/iconhub/app/test_globals.py
from __future__ import annotations

from pathlib import Path

import pytest

from iconhub.app.context import PROCESS_REGISTRY
from iconhub.app.globals import (
    COLLECTION_CACHE_KEY,
    CONFIG_SERVICE_KEY,
    config,
    configBool,
    getCollectionCache,
    getConfigService,
    initConfig,
)
from iconhub.core.errors import MissingServiceError


def test_getConfigService_beforeInitRaises() -> None:
    with pytest.raises(MissingServiceError):
        getConfigService()


def test_initConfig_registersAndIsIdempotent(tmp_path: Path) -> None:
    first = initConfig(tmp_path)

    assert PROCESS_REGISTRY.get(CONFIG_SERVICE_KEY) is first
    assert initConfig(tmp_path) is first
    assert getConfigService() is first


def test_initConfig_overridesReplaceService(tmp_path: Path) -> None:
    first = initConfig(tmp_path)
    second = initConfig(tmp_path, overrides={"icons": {"iconDir": "svg"}})

    assert second is not first
    assert config("icons.iconDir") == "svg"
    assert config("icons.missing", "fallback") == "fallback"
    assert configBool("debug.devModeEnabled") is True


def test_getCollectionCache_isProcessScoped() -> None:
    cache = getCollectionCache()

    assert getCollectionCache() is cache
    assert PROCESS_REGISTRY.get(COLLECTION_CACHE_KEY) is cache

    PROCESS_REGISTRY.unregister(COLLECTION_CACHE_KEY)
    assert getCollectionCache() is not cache


def test_processRegistry_requireAndRegister() -> None:
    PROCESS_REGISTRY.register("svc", 1)

    with pytest.raises(ValueError):
        PROCESS_REGISTRY.register("svc", 2)
    assert PROCESS_REGISTRY.require("svc", int) == 1
    with pytest.raises(TypeError):
        PROCESS_REGISTRY.require("svc", str)
    with pytest.raises(MissingServiceError):
        PROCESS_REGISTRY.require("other")


def test_initConfig_rootSwitchDropsCollectionCache(tmp_path: Path) -> None:
    first, second = tmp_path / "first", tmp_path / "second"
    first.mkdir()
    second.mkdir()

    initConfig(first)
    cache = getCollectionCache()
    initConfig(first, overrides={"icons": {"iconDir": "svg"}})
    assert getCollectionCache() is cache

    initConfig(second)
    assert PROCESS_REGISTRY.get(COLLECTION_CACHE_KEY) is None
    assert getCollectionCache() is not cache


def test_getConfigService_wrongTypeRaises() -> None:
    PROCESS_REGISTRY.register(CONFIG_SERVICE_KEY, object())

    with pytest.raises(TypeError):
        getConfigService()
