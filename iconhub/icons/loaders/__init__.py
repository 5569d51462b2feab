# iconhub/icons/loaders/__init__.py
from .iconify import loadIconifyCollections, listIconifyCollections, pickIcons
from .local import loadLocalCollection, parseSvg

__all__ = [
    "loadIconifyCollections",
    "listIconifyCollections",
    "pickIcons",
    "loadLocalCollection",
    "parseSvg",
]
