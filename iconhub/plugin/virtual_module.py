# iconhub/plugin/virtual_module.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

from iconhub.app.globals import getCollectionCache
from iconhub.config.options import IntegrationOptions
from iconhub.core.jsonutils import safeJsonDumps
from iconhub.core.logging import logContext
from iconhub.icons.aggregator import CollectionAggregator, LocalDirectoryLoader, RemoteRegistryLoader
from iconhub.icons.session_cache import SessionCache
from iconhub.icons.types import VIRTUAL_MODULE_ID, CollectionMap, countIcons

logger = logging.getLogger(__name__)

__all__ = [
    "VIRTUAL_MODULE_ID",
    "RESOLVED_VIRTUAL_MODULE_ID",
    "PluginContext",
    "VirtualModuleProvider",
    "createPlugin",
    "renderModule",
]

# "\0" keeps the id from ever matching a real file path
RESOLVED_VIRTUAL_MODULE_ID = "\0" + VIRTUAL_MODULE_ID



@dataclass(frozen=True, slots=True)
class PluginContext:
    root: Path



def renderModule(collections: CollectionMap, options: IntegrationOptions) -> str:
    """
    Module body: default export is the collection map, `config` echoes the include
    setting as validated (prefixes and names stripped, blank names and duplicates
    dropped, first occurrence order kept), not the raw user mapping.
    """
    payload = {prefix: collection.model_dump(mode="json") for prefix, collection in collections.items()}
    return (
        f"export default {safeJsonDumps(payload)};\n"
        f"export const config = {safeJsonDumps({'include': options.include})}"
    )



class VirtualModuleProvider:
    """
    Answers the two questions a build tool asks a module plugin:
    resolveId() - is this id ours, and under which internal id;
    load() - what is the source text of that internal id.
    """
    name = "iconhub"

    def __init__(self, options: IntegrationOptions, aggregator: CollectionAggregator) -> None:
        self.options = options
        self.aggregator = aggregator
        self._announced = False

    def resolveId(self, moduleId: str) -> str | None:
        if moduleId == VIRTUAL_MODULE_ID:
            return RESOLVED_VIRTUAL_MODULE_ID
        return None

    async def load(self, moduleId: str) -> str | None:
        if moduleId != RESOLVED_VIRTUAL_MODULE_ID:
            return None

        with logContext(moduleId=VIRTUAL_MODULE_ID):
            collections = await self.aggregator.aggregate()
            if not self._announced:
                self._announce(collections)
                self._announced = True
            return renderModule(collections, self.options)

    def _announce(self, collections: CollectionMap) -> None:
        if countIcons(collections) == 0:
            logger.warning("No icons detected!")
            return
        logger.info("Loaded icons from %s", ", ".join(collections.keys()))



def createPlugin(
    options: IntegrationOptions,
    ctx: PluginContext,
    *,
    cache: SessionCache[CollectionMap] | None = None,
    remoteLoader: RemoteRegistryLoader | None = None,
    localLoader: LocalDirectoryLoader | None = None,
) -> VirtualModuleProvider:
    """
    Wires a provider for one project root. Without an explicit cache the
    process-scoped collection cache is used, so the registry is read once per build process.
    """
    aggregator = CollectionAggregator(
        options,
        root=ctx.root,
        cache=cache if cache is not None else getCollectionCache(),
        remoteLoader=remoteLoader,
        localLoader=localLoader,
    )
    return VirtualModuleProvider(options, aggregator)
