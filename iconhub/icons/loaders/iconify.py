# iconhub/icons/loaders/iconify.py
from __future__ import annotations
import asyncio
import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from iconhub.config.options import IncludeConfig, RegistrySettings
from iconhub.core.errors import RemoteSourceError
from iconhub.http import client as httpClient
from iconhub.icons.types import CollectionMap, IconCollection

logger = logging.getLogger(__name__)

__all__ = [
    "WHOLE_PACK",
    "listIconifyCollections",
    "loadIconifyCollections",
    "pickIcons",
]

WHOLE_PACK = "*"



def listIconifyCollections(rootDirectory: Path, searchPaths: Iterable[str]) -> dict[str, Path]:
    """
    Finds installed icon packs. Returns prefix -> JSON file path.

    Each search path (relative to `rootDirectory`) may hold either one
    directory per pack containing `icons.json` (split packages) or one
    `<prefix>.json` file per pack (full registry dump). The first search path
    providing a prefix wins.
    """
    found: dict[str, Path] = {}
    for searchPath in searchPaths:
        base = Path(searchPath)
        if not base.is_absolute():
            base = rootDirectory / base
        if not base.is_dir():
            continue
        for child in sorted(base.iterdir()):
            if child.is_dir() and (child / "icons.json").is_file():
                found.setdefault(child.name, child / "icons.json")
            elif child.is_file() and child.suffix == ".json":
                found.setdefault(child.stem, child)
    return found



def _readCollectionFile(path: Path) -> IconCollection:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return IconCollection.model_validate(raw)
    except (OSError, ValueError) as err:
        # ValidationError and JSONDecodeError are both ValueErrors
        raise RemoteSourceError(f"Malformed icon collection '{path}': {err}") from err



def _isWholePack(names: list[str]) -> bool:
    return not names or WHOLE_PACK in names



def pickIcons(collection: IconCollection, names: list[str]) -> IconCollection:
    """
    Reduces `collection` to `names`. Aliases are kept together with their
    parent chain. Raises RemoteSourceError naming every icon that is missing.
    """
    if _isWholePack(names):
        return collection

    srcAliases = collection.aliasMap()
    icons: dict[str, Any] = {}
    aliases: dict[str, Any] = {}
    missing: list[str] = []

    for name in names:
        current = name
        seen: set[str] = set()
        while current not in collection.icons and current in srcAliases and current not in seen:
            seen.add(current)
            entry = srcAliases[current]
            aliases[current] = entry
            current = entry.get("parent") if isinstance(entry, Mapping) else None
            if not isinstance(current, str):
                break
        if isinstance(current, str) and current in collection.icons:
            icons[current] = collection.icons[current]
        else:
            missing.append(name)

    if missing:
        plural = "s" if len(missing) > 1 else ""
        raise RemoteSourceError(
            f"Unable to locate the icon{plural} {', '.join(repr(m) for m in missing)} in collection '{collection.prefix}'"
        )

    extra = dict(collection.model_extra or {})
    extra.pop("aliases", None)
    if aliases:
        extra["aliases"] = aliases
    return IconCollection(prefix=collection.prefix, icons=icons, **extra)



async def _fetchCollection(prefix: str, names: list[str], registry: RegistrySettings) -> IconCollection:
    if not registry.apiUrl:
        raise RemoteSourceError(
            f"Icon collection '{prefix}' is not installed and no registry apiUrl is configured"
        )

    url = f"{registry.apiUrl.rstrip('/')}/{prefix}.json"
    params = None if _isWholePack(names) else {"icons": ",".join(names)}
    try:
        resp = await httpClient.request(
            "GET",
            url,
            params=params,
            timeoutMs=registry.timeoutMs,
            retries=registry.retries,
        )
    except (httpClient.HTTPError, httpx.HTTPError) as err:
        raise RemoteSourceError(f"Cannot fetch icon collection '{prefix}' from '{url}': {err}") from err

    payload = resp.get("json")
    if resp["status"] != 200 or not isinstance(payload, dict):
        raise RemoteSourceError(
            f"Icon registry returned no collection for '{prefix}' (HTTP {resp['status']})"
        )
    try:
        return IconCollection.model_validate(payload)
    except ValidationError as err:
        raise RemoteSourceError(f"Malformed icon collection '{prefix}' from '{url}': {err}") from err



async def loadIconifyCollections(
    *,
    rootDirectory: str | Path,
    include: IncludeConfig,
    registry: RegistrySettings | None = None,
) -> CollectionMap:
    """
    Loads every included icon pack plus every installed pack that was not
    explicitly included (installed packs default to the whole pack).

    Included packs that are not installed are fetched from `registry.apiUrl`.
    Any failure raises RemoteSourceError.
    """
    registry = registry or RegistrySettings()
    root = Path(rootDirectory)
    installed = await asyncio.to_thread(listIconifyCollections, root, registry.searchPaths)

    requested: IncludeConfig = {prefix: list(names) for prefix, names in include.items()}
    for prefix in installed:
        requested.setdefault(prefix, [WHOLE_PACK])

    collections: CollectionMap = {}
    for prefix, names in requested.items():
        if prefix in installed:
            collection = await asyncio.to_thread(_readCollectionFile, installed[prefix])
            source = str(installed[prefix])
        else:
            collection = await _fetchCollection(prefix, names, registry)
            source = registry.apiUrl or ""
        if collection.prefix != prefix:
            logger.warning("Collection from %s declares prefix '%s', using '%s'", source, collection.prefix, prefix)
            collection = collection.model_copy(update={"prefix": prefix})
        collections[prefix] = pickIcons(collection, names)
        logger.debug("Loaded %d icon(s) of '%s' from %s", len(collections[prefix].icons), prefix, source)

    return collections
