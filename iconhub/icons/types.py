# iconhub/icons/types.py
from __future__ import annotations
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["LOCAL_PREFIX", "VIRTUAL_MODULE_ID", "IconCollection", "CollectionMap", "countIcons"]

# Reserved prefix of the collection built from the project's own icon directory
LOCAL_PREFIX = "local"

# Id application code imports the aggregated icon map from
VIRTUAL_MODULE_ID = "virtual:iconhub"



class IconCollection(BaseModel):
    """
    One icon pack in Iconify JSON shape.

    `icons` maps icon names to opaque definitions (usually {"body", "width", "height"}).
    Other Iconify keys (aliases, width, height, info, ...) are kept as extra fields
    so they survive serialization into the virtual module.
    """
    model_config = ConfigDict(extra="allow")

    prefix: str = Field(min_length=1)
    icons: dict[str, Any] = Field(default_factory=dict)

    def aliasMap(self) -> dict[str, Any]:
        aliases = (self.model_extra or {}).get("aliases")
        return aliases if isinstance(aliases, dict) else {}



CollectionMap: TypeAlias = dict[str, IconCollection]



def countIcons(collections: CollectionMap) -> int:
    return sum(len(collection.icons) for collection in collections.values())
