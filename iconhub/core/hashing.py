# iconhub/core/hashing.py
from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from iconhub.icons.types import IconCollection

__all__ = ["ICON_NAME_SEPARATOR", "collectionsHash"]

ICON_NAME_SEPARATOR = ","



def collectionsHash(collections: Sequence[IconCollection]) -> str:
    """
    Returns a SHA-256 hex digest over the prefixes and icon names of `collections`.

    Icon names are sorted inside each collection, so the insertion order of an
    icon mapping never changes the digest. The order of the collections
    themselves is kept as given. Icon payloads are not hashed.
    """
    sha = hashlib.sha256()

    for collection in collections:
        sha.update(collection.prefix.encode("utf-8"))
        names = sorted(collection.icons.keys())
        sha.update(ICON_NAME_SEPARATOR.join(names).encode("utf-8"))

    return sha.hexdigest()
