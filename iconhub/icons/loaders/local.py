# iconhub/icons/loaders/local.py
from __future__ import annotations
import asyncio
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from iconhub.core.errors import LocalSourceInvalidError, LocalSourceMissingError
from iconhub.icons.types import LOCAL_PREFIX, IconCollection

logger = logging.getLogger(__name__)

__all__ = ["loadLocalCollection", "parseSvg"]

_XML_DECL = re.compile(r"<\?xml[^>]*\?>", re.IGNORECASE)
_DOCTYPE = re.compile(r"<!DOCTYPE[^>]*>", re.IGNORECASE)
_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
_SVG_ROOT = re.compile(r"<svg\b(?P<attrs>[^>]*)>(?P<body>.*)</svg\s*>", re.IGNORECASE | re.DOTALL)
_ATTR = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_NUMBER = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")



def _attrs(raw: str) -> dict[str, str]:
    return {match.group(1): match.group(2) if match.group(2) is not None else match.group(3) for match in _ATTR.finditer(raw)}



def _number(value: str | None) -> float | int | None:
    if not value:
        return None
    match = _NUMBER.match(value)
    if not match:
        return None
    num = float(match.group(1))
    return int(num) if num.is_integer() else num



def parseSvg(text: str, *, stripComments: bool = True) -> dict[str, Any] | None:
    """
    Splits an SVG document into an Iconify icon definition: {"body", "width", "height"}.

    Dimensions come from viewBox, falling back to width/height attributes.
    Returns None when the text has no root <svg> element. The markup itself
    is passed through untouched apart from optional comment removal.
    """
    text = _DOCTYPE.sub("", _XML_DECL.sub("", text))
    if stripComments:
        text = _COMMENT.sub("", text)

    match = _SVG_ROOT.search(text)
    if match is None:
        return None

    attrs = _attrs(match.group("attrs"))
    width = height = None
    viewBox = attrs.get("viewBox") or attrs.get("viewbox")
    if viewBox:
        parts = viewBox.replace(",", " ").split()
        if len(parts) == 4:
            width, height = _number(parts[2]), _number(parts[3])
    if width is None:
        width = _number(attrs.get("width"))
    if height is None:
        height = _number(attrs.get("height"))

    icon: dict[str, Any] = {"body": match.group("body").strip()}
    if width is not None:
        icon["width"] = width
    if height is not None:
        icon["height"] = height
    return icon



def _scanDirectory(directory: Path, stripComments: bool) -> dict[str, Any]:
    icons: dict[str, Any] = {}
    for path in sorted(directory.rglob("*.svg")):
        if not path.is_file():
            continue
        name = path.relative_to(directory).with_suffix("").as_posix()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            logger.warning("Skipping unreadable icon '%s': %s", path, err)
            continue
        icon = parseSvg(text, stripComments=stripComments)
        if icon is None:
            logger.warning("Skipping '%s': no <svg> root element", path)
            continue
        icons[name] = icon
    return icons



async def loadLocalCollection(
    *,
    directoryPath: str | Path,
    processingOptions: Mapping[str, Any] | None = None,
) -> IconCollection:
    """
    Builds the local collection from every *.svg under `directoryPath`.
    Icon names are relative POSIX paths without the suffix ("social/github").

    Raises:
        LocalSourceMissingError: the directory does not exist
        LocalSourceInvalidError: the directory holds no usable icon
    """
    directory = Path(directoryPath)
    if not directory.is_dir():
        raise LocalSourceMissingError(f"Icon directory '{directory}' does not exist", directory=directory)

    options = dict(processingOptions or {})
    stripComments = bool(options.get("stripComments", True))

    icons = await asyncio.to_thread(_scanDirectory, directory, stripComments)
    if not icons:
        raise LocalSourceInvalidError(f"Icon directory '{directory}' contains no usable SVG files", directory=directory)

    logger.debug("Loaded %d local icon(s) from '%s'", len(icons), directory)
    return IconCollection(prefix=LOCAL_PREFIX, icons=icons)
