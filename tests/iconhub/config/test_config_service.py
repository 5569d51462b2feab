# tests/iconhub/config/test_config_service.py
from __future__ import annotations

from pathlib import Path

import pytest

from iconhub.config.options import DEFAULT_ICON_DIR, DEFAULT_SEARCH_PATHS, DEFAULT_TYPES_PATH, IntegrationOptions
from iconhub.config.service import CONFIG_FILE_NAME, ConfigService, mergeDeep
from iconhub.core.errors import ConfigError


def _writeConfig(root: Path, text: str) -> Path:
    path = root / CONFIG_FILE_NAME
    path.write_text(text, encoding="utf-8")
    return path


# ----------------------------
# mergeDeep
# ----------------------------

def test_mergeDeep_rightWinsAndNoneDoesNotErase() -> None:
    left = {"icons": {"iconDir": "a", "include": {"mdi": ["home"]}}, "logging": {"file": "x.log"}}
    right = {"icons": {"iconDir": "b"}, "logging": {"file": None}}

    merged = mergeDeep(left, right)

    assert merged == {"icons": {"iconDir": "b", "include": {"mdi": ["home"]}}, "logging": {"file": "x.log"}}
    merged["icons"]["include"]["mdi"].append("account")
    assert left["icons"]["include"]["mdi"] == ["home"]


def test_mergeDeep_listsAreReplaced() -> None:
    assert mergeDeep({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}


# ----------------------------
# ConfigService
# ----------------------------

def test_configService_defaultsWithoutFile(tmp_path: Path) -> None:
    service = ConfigService.bootstrap(tmp_path)

    assert service.root == tmp_path.resolve()
    assert service.getBool("debug.devModeEnabled") is True
    assert service.get("logging.file") is None
    assert service.get("does.not.exist", 300) == 300


def test_configService_fileOverridesDefaults(tmp_path: Path) -> None:
    _writeConfig(tmp_path, "{ debug: { devModeEnabled: false }, icons: { iconDir: 'assets/svg' } }")

    service = ConfigService.bootstrap(tmp_path)

    assert service.getBool("debug.devModeEnabled", True) is False
    assert service.get("icons.iconDir") == "assets/svg"


def test_configService_overridesWinOverFile(tmp_path: Path) -> None:
    _writeConfig(tmp_path, "{ icons: { iconDir: 'assets/svg' } }")

    service = ConfigService.bootstrap(tmp_path, overrides={"icons": {"iconDir": "cli/icons"}})

    assert service.get("icons.iconDir") == "cli/icons"
    service.set("icons.iconDir", None)
    assert service.get("icons.iconDir") == "assets/svg"


def test_configService_explicitRelativeConfigFile(tmp_path: Path) -> None:
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "custom.json5").write_text("{ icons: { typesPath: 'types/icons.d.ts' } }", encoding="utf-8")

    service = ConfigService.bootstrap(tmp_path, configFile="conf/custom.json5")

    assert service.integrationOptions().typesPath == "types/icons.d.ts"


def test_configService_nonObjectFileRaisesConfigError(tmp_path: Path) -> None:
    _writeConfig(tmp_path, "[1, 2]")

    with pytest.raises(ConfigError):
        ConfigService.bootstrap(tmp_path)


def test_configService_getReturnsCopies(tmp_path: Path) -> None:
    service = ConfigService.bootstrap(tmp_path, overrides={"icons": {"include": {"mdi": ["home"]}}})

    service.get("icons.include.mdi").append("account")

    assert service.get("icons.include.mdi") == ["home"]


def test_configService_getBoolParsesStrings(tmp_path: Path) -> None:
    service = ConfigService.bootstrap(tmp_path, overrides={"flags": {"a": "yes", "b": "off"}})

    assert service.getBool("flags.a") is True
    assert service.getBool("flags.b") is False


# ----------------------------
# IntegrationOptions
# ----------------------------

def test_integrationOptions_defaults(tmp_path: Path) -> None:
    options = ConfigService.bootstrap(tmp_path).integrationOptions()

    assert options.include == {}
    assert options.iconDir == DEFAULT_ICON_DIR
    assert options.typesPath == DEFAULT_TYPES_PATH
    assert options.defaultPack == "local"
    assert options.registry.searchPaths == list(DEFAULT_SEARCH_PATHS)
    assert options.registry.apiUrl is None


def test_integrationOptions_fromFile(tmp_path: Path) -> None:
    _writeConfig(
        tmp_path,
        """{
            icons: {
                include: { mdi: ['home', 'account', 'home'], 'fa-solid': ['*'] },
                registry: { apiUrl: 'https://api.iconify.design', retries: 0 },
            },
        }""",
    )

    options = ConfigService.bootstrap(tmp_path).integrationOptions()

    assert options.include == {"mdi": ["home", "account"], "fa-solid": ["*"]}
    assert options.registry.apiUrl == "https://api.iconify.design"
    assert options.registry.retries == 0


def test_integrationOptions_unknownKeyRaisesConfigError(tmp_path: Path) -> None:
    _writeConfig(tmp_path, "{ icons: { iconDirectory: 'typo' } }")

    with pytest.raises(ConfigError):
        ConfigService.bootstrap(tmp_path).integrationOptions()


def test_integrationOptions_rejectsEmptyPrefix() -> None:
    with pytest.raises(ValueError):
        IntegrationOptions.model_validate({"include": {"  ": ["home"]}})
