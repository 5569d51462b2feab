# iconhub/config/providers.py
from __future__ import annotations
import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5

from iconhub.core.dictpath import getByPath, setByPath, deleteByPath

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigProvider",
    "OverrideProvider",
    "DictProvider",
    "DefaultsProvider",
    "FileProvider",
    "readJson5Object",
]



def readJson5Object(path: Path) -> dict[str, Any] | None:
    """
    Parses a JSON/JSON5 file that must hold an object.

    Returns None when the file does not exist. An empty document counts as {}.
    Raises ValueError on syntax errors and TypeError when the top level is not an object.
    """
    if not path.exists():
        return None
    if not path.is_file():
        raise IsADirectoryError(f"Config path '{path}' is not a file")

    parsed = json5.loads(path.read_text(encoding="utf-8") or "{}")
    if parsed is None:
        return {}
    if not isinstance(parsed, Mapping):
        raise TypeError(f"Config file '{path}' must hold an object, got {type(parsed).__name__}")
    return dict(parsed)



class ConfigProvider(ABC):
    """One configuration layer. Keys are dotted paths ("icons.registry.apiUrl")."""
    name = "layer"

    @abstractmethod
    def get(self, key: str) -> Any | None: ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def set(self, key: str, value: Any) -> None:
        raise RuntimeError(f"Config layer '{self.name}' is read-only")



# ----------------------------------------------
#           Read-only mapping layers
# ----------------------------------------------

class DictProvider(ConfigProvider):
    name = "dict"

    def __init__(self, data: Mapping[str, Any]) -> None:
        if not isinstance(data, Mapping):
            raise TypeError(f"{type(self).__name__} needs a mapping, got {type(data).__name__}")
        self._data = data

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self._data))



class DefaultsProvider(DictProvider):
    """
    Shipped defaults, given inline (`data`) or as a JSON5 file (`path`).
    Exactly one of the two must be passed.

    A missing file raises FileNotFoundError unless strict=False, which yields
    an empty layer. A file that does not parse into an object raises TypeError.
    """
    name = "defaults"

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        path: Path | str | None = None,
        strict: bool = True,
    ) -> None:
        if (data is None) == (path is None):
            raise ValueError("DefaultsProvider takes exactly one of 'data' or 'path'")

        if path is not None:
            path = Path(path)
            try:
                loaded = readJson5Object(path)
            except ValueError as err:
                raise TypeError(f"Defaults file '{path}' is not valid JSON5: {err}") from err
            if loaded is None:
                if strict:
                    raise FileNotFoundError(f"Defaults file '{path}' not found")
                loaded = {}
            data = loaded

        super().__init__(data)  # type: ignore[arg-type]



# ----------------------------------------------
#          Project file and overrides
# ----------------------------------------------

class OverrideProvider(ConfigProvider):
    """
    In-memory top layer for CLI flags, tests and embedding hosts.
    Nothing here is persisted. Setting a key to None drops it.
    """
    name = "overrides"

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))

    def get(self, key: str) -> Any | None:
        return getByPath(self._data, key, None)

    def set(self, key: str, value: Any) -> None:
        if value is None:
            deleteByPath(self._data, key)
        else:
            setByPath(self._data, key, copy.deepcopy(value), createIfMissing=True)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)



class FileProvider(DictProvider):
    """
    Read-only layer backed by the project's `iconhub.json5`.

    A missing file is an empty layer. A file with syntax errors is logged and
    treated as empty, so a half-edited config never stops a dev server. A
    file whose top level is not an object raises TypeError.
    """
    name = "file"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(self._read())

    def _read(self) -> dict[str, Any]:
        try:
            loaded = readJson5Object(self.path)
        except ValueError as err:
            logger.warning("Ignoring '%s', it does not parse: %s", self.path, err)
            return {}
        if loaded is None:
            logger.debug("No config file at '%s'", self.path)
            return {}
        return loaded
