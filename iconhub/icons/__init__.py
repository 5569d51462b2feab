# iconhub/icons/__init__.py
from .types import LOCAL_PREFIX, VIRTUAL_MODULE_ID, IconCollection, CollectionMap, countIcons
from .artifact import ArtifactCache
from .session_cache import SessionCache
from .aggregator import CollectionAggregator, SourceOutcome

__all__ = [
    "LOCAL_PREFIX",
    "VIRTUAL_MODULE_ID",
    "IconCollection",
    "CollectionMap",
    "countIcons",
    "ArtifactCache",
    "SessionCache",
    "CollectionAggregator",
    "SourceOutcome",
]
