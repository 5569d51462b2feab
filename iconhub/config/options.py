# iconhub/config/options.py
from __future__ import annotations
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "IncludeConfig",
    "DEFAULT_ICON_DIR",
    "DEFAULT_TYPES_PATH",
    "DEFAULT_SEARCH_PATHS",
    "RegistrySettings",
    "IntegrationOptions",
]

# prefix -> icon names; ["*"] keeps the whole pack
IncludeConfig: TypeAlias = dict[str, list[str]]

DEFAULT_ICON_DIR = "src/icons"
DEFAULT_TYPES_PATH = ".iconhub/icon.d.ts"
DEFAULT_SEARCH_PATHS = (
    "node_modules/@iconify-json",
    "node_modules/@iconify/json/json",
)



class RegistrySettings(BaseModel):
    """Where icon packs are looked up before falling back to the HTTP registry."""
    model_config = ConfigDict(extra="forbid")

    searchPaths: list[str] = Field(default_factory=lambda: list(DEFAULT_SEARCH_PATHS))
    apiUrl: str | None = None
    timeoutMs: int = Field(default=30_000, gt=0)
    retries: int = Field(default=2, ge=0)



class IntegrationOptions(BaseModel):
    """Validated `icons` section of the project configuration."""
    model_config = ConfigDict(extra="forbid")

    include: IncludeConfig = Field(default_factory=dict)
    iconDir: str = DEFAULT_ICON_DIR
    processingOptions: dict[str, Any] = Field(default_factory=dict)
    typesPath: str = DEFAULT_TYPES_PATH
    defaultPack: str = Field(default="local", min_length=1)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)

    @field_validator("include")
    @classmethod
    def _normalizeInclude(cls, value: IncludeConfig) -> IncludeConfig:
        out: IncludeConfig = {}
        for prefix, names in value.items():
            prefix = prefix.strip()
            if not prefix:
                raise ValueError("include keys must be non-empty collection prefixes")
            # Keep first occurrence order, drop duplicates
            out[prefix] = list(dict.fromkeys(name.strip() for name in names if name.strip()))
        return out
