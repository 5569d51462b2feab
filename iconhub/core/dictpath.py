# iconhub/core/dictpath.py
from __future__ import annotations
from collections.abc import Mapping, MutableMapping
from typing import Any

__all__ = ["splitPath", "getByPath", "setByPath", "hasPath", "deleteByPath"]

_MISSING = object()



def splitPath(path: str) -> list[str]:
    """
    "icons.registry.apiUrl" -> ["icons", "registry", "apiUrl"]

    A backslash takes the next character literally, so prefixes containing
    dots stay addressable: r"icons.include.a\\.b" -> ["icons", "include", "a.b"].
    Empty paths, empty segments and a trailing backslash raise ValueError.
    """
    if not isinstance(path, str) or not path:
        raise ValueError("Config path must be a non-empty string")

    segments = [""]
    chars = iter(path)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                raise ValueError(f"Config path '{path}' ends with a bare backslash")
            segments[-1] += escaped
        elif ch == ".":
            segments.append("")
        else:
            segments[-1] += ch

    if "" in segments:
        raise ValueError(f"Config path '{path}' has an empty segment")
    return segments



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """Value at `path`, or `default` when the path is invalid or does not lead anywhere."""
    try:
        segments = splitPath(path)
    except ValueError:
        return default

    node = obj
    for segment in segments:
        if not isinstance(node, Mapping):
            return default
        node = node.get(segment, _MISSING)
        if node is _MISSING:
            return default
    return node



def hasPath(obj: Any, path: str) -> bool:
    return getByPath(obj, path, _MISSING) is not _MISSING



def setByPath(obj: MutableMapping[str, Any], path: str, value: Any, *, createIfMissing: bool = False) -> None:
    """
    Stores `value` at `path`. Missing intermediate dicts are created with
    createIfMissing=True and raise KeyError otherwise. Walking through a
    non-mapping value raises TypeError.
    """
    *parents, leaf = splitPath(path)

    node = obj
    for segment in parents:
        if segment not in node:
            if not createIfMissing:
                raise KeyError(f"'{segment}' does not exist (in '{path}')")
            node[segment] = {}
        child = node[segment]
        if not isinstance(child, MutableMapping):
            raise TypeError(f"'{segment}' is a {type(child).__name__}, cannot descend (in '{path}')")
        node = child

    node[leaf] = value



def deleteByPath(obj: MutableMapping[str, Any], path: str, *, pruneEmptyParents: bool = True) -> bool:
    """
    Removes the value at `path`; False when there was nothing to remove.
    With pruneEmptyParents, dicts emptied by the removal go too (`obj` itself stays).
    """
    return _delete(obj, splitPath(path), pruneEmptyParents)



def _delete(node: Any, segments: list[str], prune: bool) -> bool:
    if not isinstance(node, MutableMapping) or segments[0] not in node:
        return False
    if len(segments) == 1:
        del node[segments[0]]
        return True

    child = node[segments[0]]
    removed = _delete(child, segments[1:], prune)
    if removed and prune and isinstance(child, MutableMapping) and not child:
        del node[segments[0]]
    return removed
