# iconhub/icons/artifact.py
"""
Generated type declarations for the virtual icon module.

The artifact describes itself: its header carries the fingerprint of the icon
set that produced it, so staleness is decided without a sidecar file.

Header micro-format (icon-types/1):

    line 1: "// Automatically generated by iconhub (icon-types/1)"
    line 2: "// " + 64 lowercase hex chars (SHA-256 fingerprint)
    line 3: empty

A fingerprint is only trusted when line 1 carries the marker AND the current
format version. Changing the layout means bumping ARTIFACT_FORMAT_VERSION, which
turns every older file into a cache miss instead of a misparse.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import tempfile
from collections.abc import Sequence
from pathlib import Path

from iconhub.core.errors import ArtifactReadError, ArtifactWriteError
from iconhub.core.hashing import collectionsHash
from .types import LOCAL_PREFIX, VIRTUAL_MODULE_ID, IconCollection

logger = logging.getLogger(__name__)

__all__ = [
    "ARTIFACT_MARKER",
    "ARTIFACT_FORMAT_VERSION",
    "ArtifactCache",
    "headerLines",
    "parseFingerprint",
    "iconIdentifiers",
    "renderDeclaration",
]

ARTIFACT_MARKER = "// Automatically generated by iconhub"
ARTIFACT_FORMAT_VERSION = 1

_FORMAT_TOKEN = f"(icon-types/{ARTIFACT_FORMAT_VERSION})"
_FINGERPRINT_LINE = re.compile(r"^// ([0-9a-f]{64})$")



def headerLines(fingerprint: str) -> list[str]:
    return [f"{ARTIFACT_MARKER} {_FORMAT_TOKEN}", f"// {fingerprint}", ""]



def parseFingerprint(text: str) -> str | None:
    """Returns the fingerprint embedded in an artifact's header, or None when the header is not ours."""
    lines = text.split("\n", 3)
    if len(lines) < 2:
        return None
    marker, fingerprintLine = lines[0].rstrip("\r"), lines[1].rstrip("\r")
    if not marker.startswith(ARTIFACT_MARKER) or not marker.endswith(_FORMAT_TOKEN):
        return None
    match = _FINGERPRINT_LINE.match(fingerprintLine)
    return match.group(1) if match else None



def iconIdentifiers(collections: Sequence[IconCollection], *, defaultPack: str = LOCAL_PREFIX) -> list[str]:
    """
    Every addressable icon id: bare names for `defaultPack`, "prefix:name" for
    the rest. Collection and insertion order are kept; duplicates are dropped.
    """
    ids: dict[str, None] = {}
    for collection in collections:
        qualifier = "" if collection.prefix == defaultPack else f"{collection.prefix}:"
        for name in collection.icons:
            ids[f"{qualifier}{name}"] = None
    return list(ids)



def renderDeclaration(
    collections: Sequence[IconCollection],
    fingerprint: str,
    *,
    defaultPack: str = LOCAL_PREFIX,
    moduleId: str = VIRTUAL_MODULE_ID,
) -> str:
    ids = iconIdentifiers(collections, defaultPack=defaultPack)
    # No icons: uninhabited, so any icon reference fails type checking
    members = "".join(f"\n\t\t| {json.dumps(iconId, ensure_ascii=False)}" for iconId in ids) if ids else "never"
    body = [
        *headerLines(fingerprint),
        f"declare module '{moduleId}' {{",
        f"\texport type Icon = {members};",
        "}",
        "",
    ]
    return "\n".join(body)



class ArtifactCache:
    """
    Keeps a type-declaration file in sync with an icon set.

    reconcile() only touches the disk when the fingerprint embedded in the
    current file differs from the fingerprint of `collections`, so repeated
    builds with unchanged icons never wake file watchers.
    """
    def __init__(self, *, defaultPack: str = LOCAL_PREFIX, moduleId: str = VIRTUAL_MODULE_ID) -> None:
        self.defaultPack = defaultPack
        self.moduleId = moduleId

    async def reconcile(self, targetPath: str | Path, collections: Sequence[IconCollection]) -> bool:
        """Regenerates `targetPath` if stale. Returns True when the file was written."""
        targetPath = Path(targetPath)
        collections = list(collections)
        currentHash = collectionsHash(collections)

        try:
            previousHash = await asyncio.to_thread(self.readFingerprint, targetPath)
        except ArtifactReadError as err:
            logger.debug("Ignoring unreadable icon types at '%s': %s", targetPath, err)
            previousHash = None

        if previousHash == currentHash:
            logger.debug("Icon types at '%s' are up to date (%s)", targetPath, currentHash[:12])
            return False

        text = renderDeclaration(collections, currentHash, defaultPack=self.defaultPack, moduleId=self.moduleId)
        await asyncio.to_thread(self._write, targetPath, text)
        logger.info("Wrote icon types to '%s' (%s)", targetPath, currentHash[:12])
        return True

    def readFingerprint(self, path: Path) -> str | None:
        """
        None when there is no file or its header is not a valid iconhub header.
        Raises ArtifactReadError when the file exists but cannot be read.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as err:
            raise ArtifactReadError(f"Cannot read '{path}': {err}", path=path) from err
        return parseFingerprint(text)

    def _ensureDir(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            # Only the end state matters: someone else may have created it meanwhile
            if directory.is_dir():
                logger.debug("Directory '%s' exists after failed mkdir: %s", directory, err)
                return
            raise ArtifactWriteError(f"Cannot create directory '{directory}': {err}", path=directory) from err

    def _write(self, path: Path, text: str) -> None:
        self._ensureDir(path.parent)
        # One temp file per writer; overlapping reconciles each replace their own
        try:
            fd, tmpName = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".", suffix=".tmp")
        except OSError as err:
            raise ArtifactWriteError(f"Cannot write '{path}': {err}", path=path) from err
        tmpPath = Path(tmpName)
        try:
            with open(fd, "w", encoding="utf-8", newline="\n") as fl:
                fl.write(text)
            os.chmod(tmpPath, 0o644)
            os.replace(tmpPath, path)
        except OSError as err:
            tmpPath.unlink(missing_ok=True)
            raise ArtifactWriteError(f"Cannot write '{path}': {err}", path=path) from err
