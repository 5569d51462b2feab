# iconhub/icons/aggregator.py
from __future__ import annotations
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

from iconhub.config.options import IncludeConfig, IntegrationOptions
from iconhub.core.errors import (
    IconSourceError,
    LocalSourceInvalidError,
    LocalSourceMissingError,
    RemoteSourceError,
)
from iconhub.core.logging import logContext
from .artifact import ArtifactCache
from .loaders import loadIconifyCollections, loadLocalCollection
from .session_cache import SessionCache
from .types import LOCAL_PREFIX, CollectionMap, IconCollection

logger = logging.getLogger(__name__)

__all__ = [
    "RemoteRegistryLoader",
    "LocalDirectoryLoader",
    "SourceOutcome",
    "CollectionAggregator",
]

T = TypeVar("T")



class RemoteRegistryLoader(Protocol):
    def __call__(self, *, rootDirectory: Path, include: IncludeConfig) -> Awaitable[CollectionMap]:
        ...



class LocalDirectoryLoader(Protocol):
    def __call__(self, *, directoryPath: Path, processingOptions: Mapping[str, Any]) -> Awaitable[IconCollection]:
        ...



@dataclass(frozen=True, slots=True)
class SourceOutcome(Generic[T]):
    """Result of one source loader call: either a value or a typed source error."""
    source: str
    value: T | None = None
    error: IconSourceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]



async def _attempt(source: str, call: Callable[[], Awaitable[T]], wrap: type[IconSourceError]) -> SourceOutcome[T]:
    """
    Runs a loader and captures its failure as a typed outcome. Loader errors
    that are not IconSourceErrors are wrapped into `wrap`, keeping the cause.
    """
    try:
        return SourceOutcome(source=source, value=await call())
    except IconSourceError as err:
        return SourceOutcome(source=source, error=err)
    except Exception as err:
        wrapped = wrap(f"{source} icon source failed: {type(err).__name__}: {err}")
        wrapped.__cause__ = err
        return SourceOutcome(source=source, error=wrapped)



class CollectionAggregator:
    """
    Merges the icon registry and the local icon directory into one CollectionMap
    and keeps the generated type declarations in sync with it.

    Failure policy:
      - registry (remote) errors propagate; an empty icon set would only hide the cause
      - a missing local directory is expected and logged at debug level
      - a local directory without usable icons is logged as a warning
    Both local failures leave the registry collections untouched.

    The registry result goes through `cache`, so it is fetched once per cache
    lifetime. The local directory is re-read on every aggregate() call and
    layered on a copy of the cached map; local always wins on prefix clashes.
    """
    def __init__(
        self,
        options: IntegrationOptions,
        *,
        root: str | Path,
        cache: SessionCache[CollectionMap] | None = None,
        remoteLoader: RemoteRegistryLoader | None = None,
        localLoader: LocalDirectoryLoader | None = None,
        artifacts: ArtifactCache | None = None,
    ) -> None:
        self.options = options
        self.root = Path(root)
        self.cache: SessionCache[CollectionMap] = cache if cache is not None else SessionCache("icons.collections")
        self._remoteLoader: RemoteRegistryLoader = remoteLoader or partial(loadIconifyCollections, registry=options.registry)
        self._localLoader: LocalDirectoryLoader = localLoader or loadLocalCollection
        self.artifacts = artifacts or ArtifactCache(defaultPack=options.defaultPack)

    @property
    def typesPath(self) -> Path:
        return self.root / self.options.typesPath

    @property
    def iconDir(self) -> Path:
        return self.root / self.options.iconDir

    async def loadRemote(self) -> CollectionMap:
        with logContext(source="remote"):
            outcome = await _attempt(
                "remote",
                lambda: self._remoteLoader(rootDirectory=self.root, include=self.options.include),
                RemoteSourceError,
            )
            collections = outcome.unwrap()
            logger.debug("Registry returned %d collection(s)", len(collections))
            return dict(collections)

    async def loadLocal(self) -> SourceOutcome[IconCollection]:
        with logContext(source="local"):
            outcome = await _attempt(
                "local",
                lambda: self._localLoader(directoryPath=self.iconDir, processingOptions=self.options.processingOptions),
                LocalSourceInvalidError,
            )
            if isinstance(outcome.error, LocalSourceMissingError):
                logger.debug("No local icons: %s", outcome.error)
            elif outcome.error is not None:
                logger.warning("Ignoring local icons: %s", outcome.error)
            return outcome

    async def aggregate(self) -> CollectionMap:
        remote = await self.cache.getOrPopulate(self.loadRemote)
        collections: CollectionMap = dict(remote)

        local = await self.loadLocal()
        if local.ok and local.value is not None:
            localCollection = local.value
            if localCollection.prefix != LOCAL_PREFIX:
                localCollection = localCollection.model_copy(update={"prefix": LOCAL_PREFIX})
            if LOCAL_PREFIX in collections:
                logger.debug("Local icons replace registry collection '%s'", LOCAL_PREFIX)
            collections[LOCAL_PREFIX] = localCollection

        await self.artifacts.reconcile(self.typesPath, list(collections.values()))
        return collections
