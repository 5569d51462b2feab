# iconhub/config/service.py
from __future__ import annotations
import copy
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from iconhub.core.errors import ConfigError
from .options import IntegrationOptions
from .providers import ConfigProvider, DefaultsProvider, FileProvider, OverrideProvider

logger = logging.getLogger(__name__)

__all__ = ["CONFIG_FILE_NAME", "DEFAULT_CONFIG", "ConfigService", "mergeDeep"]

CONFIG_FILE_NAME = "iconhub.json5"

DEFAULT_CONFIG: dict[str, Any] = {
    "icons": {},
    "debug": {
        "devModeEnabled": True,
    },
    "logging": {
        "file": None,
    },
    "http": {
        "host": "127.0.0.1",
        "port": 5174,
        "cors": {
            "allowOrigins": ["http://localhost:5173", "http://127.0.0.1:5173"],
        },
    },
}



def mergeDeep(left: Any, right: Any) -> Any:
    """
    Deep merge where `right` wins:
      - dicts: recurse per key
      - lists and scalars: right replaces left (copied, no aliasing)
      - None on the right never erases a value from the left
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        out: dict[str, Any] = {key: copy.deepcopy(value) for key, value in left.items()}
        for key, rightValue in right.items():
            if rightValue is None and key in out:
                continue
            out[key] = mergeDeep(out.get(key), rightValue)
        return out
    if right is None:
        return copy.deepcopy(left)
    return copy.deepcopy(right)



class ConfigService:
    """
    Layered configuration for one project root.

    Layers, lowest precedence first:
      1) shipped defaults (DEFAULT_CONFIG)
      2) project file (`<root>/iconhub.json5`, read-only)
      3) in-memory overrides (CLI flags, tests, embedding hosts)
    """
    def __init__(self, root: Path, layers: list[ConfigProvider]) -> None:
        if not layers:
            raise ValueError("ConfigService needs at least one layer")
        self._root = Path(root)
        self._layers = list(layers)
        self._overrides = next(
            (layer for layer in reversed(self._layers) if isinstance(layer, OverrideProvider)),
            None,
        )

    @classmethod
    def bootstrap(
        cls,
        root: str | Path = ".",
        *,
        configFile: str | Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigService:
        rootPath = Path(root).resolve()
        filePath = Path(configFile) if configFile is not None else rootPath / CONFIG_FILE_NAME
        if not filePath.is_absolute():
            filePath = rootPath / filePath

        try:
            fileLayer = FileProvider(filePath)
        except (TypeError, OSError) as err:
            raise ConfigError(f"Cannot load configuration file '{filePath}': {err}") from err

        service = cls(
            rootPath,
            [
                DefaultsProvider(data=DEFAULT_CONFIG),
                fileLayer,
                OverrideProvider(overrides),
            ],
        )
        logger.debug("Config bootstrapped for '%s' (file: %s)", rootPath, filePath)
        return service

    @property
    def root(self) -> Path:
        return self._root

    def get(self, path: str, default: Any = None) -> Any:
        """Returns the value at a dotted path from the topmost layer that has it."""
        for layer in reversed(self._layers):
            value = layer.get(path)
            if value is not None:
                return copy.deepcopy(value)
        return default

    def getBool(self, path: str, default: bool = False) -> bool:
        value = self.get(path, default)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)

    def set(self, path: str, value: Any) -> None:
        """Writes into the override layer. None removes the override."""
        if self._overrides is None:
            raise RuntimeError("ConfigService has no writable override layer")
        self._overrides.set(path, value)

    def snapshot(self) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for layer in self._layers:
            merged = mergeDeep(merged, layer.to_dict())
        return merged

    def integrationOptions(self) -> IntegrationOptions:
        section = self.snapshot().get("icons") or {}
        try:
            return IntegrationOptions.model_validate(section)
        except ValidationError as err:
            raise ConfigError(f"Invalid 'icons' configuration: {err}") from err
