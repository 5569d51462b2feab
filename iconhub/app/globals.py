# iconhub/app/globals.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, cast

from iconhub.app.context import PROCESS_REGISTRY
from iconhub.config.service import ConfigService
from iconhub.core.errors import MissingServiceError
from iconhub.icons.session_cache import SessionCache
from iconhub.icons.types import CollectionMap

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_SERVICE_KEY",
    "COLLECTION_CACHE_KEY",
    "initConfig",
    "getConfigService",
    "config",
    "configBool",
    "getCollectionCache",
]

CONFIG_SERVICE_KEY = "config.service"
COLLECTION_CACHE_KEY = "icons.collections"



def initConfig(root: str | Path = ".", *, configFile: str | Path | None = None, overrides: dict[str, Any] | None = None) -> ConfigService:
    """
    Bootstraps the process-wide ConfigService (idempotent unless overrides are given).

    Switching to another project root drops the process collection cache, since
    the cached registry packs were discovered under the previous root.
    """
    existing = PROCESS_REGISTRY.get(CONFIG_SERVICE_KEY)
    if isinstance(existing, ConfigService) and configFile is None and not overrides and existing.root == Path(root).resolve():
        return existing
    service = ConfigService.bootstrap(root, configFile=configFile, overrides=overrides)
    if isinstance(existing, ConfigService) and existing.root != service.root:
        if PROCESS_REGISTRY.unregister(COLLECTION_CACHE_KEY) is not None:
            logger.debug("Root changed to '%s', collection cache dropped", service.root)
    PROCESS_REGISTRY.register(CONFIG_SERVICE_KEY, service, overwrite=True)
    logger.debug("Config initialized for '%s'", service.root)
    return service



def getConfigService() -> ConfigService:
    try:
        return PROCESS_REGISTRY.require(CONFIG_SERVICE_KEY, ConfigService)
    except MissingServiceError as err:
        raise MissingServiceError(
            "ConfigService is not initialized. Call initConfig() before reading configuration."
        ) from err



def config(path: str, default: Any = None) -> Any:
    """
    Read a dotted path from the merged configuration.

    Example:
      config("icons.iconDir")            # "src/icons"
      config("non.existing.path", 300)   # 300
    """
    return getConfigService().get(path, default)



def configBool(path: str, default: bool = False) -> bool:
    return getConfigService().getBool(path, default)



def getCollectionCache() -> SessionCache[CollectionMap]:
    """
    Returns the process-scoped collection cache, creating it on first use.
    Drop it with PROCESS_REGISTRY.unregister(COLLECTION_CACHE_KEY) or cache.evict().
    It is not keyed by root; initConfig() drops it when the project root changes.
    """
    cache = PROCESS_REGISTRY.get(COLLECTION_CACHE_KEY)
    if isinstance(cache, SessionCache):
        return cast("SessionCache[CollectionMap]", cache)
    cache = SessionCache[CollectionMap](COLLECTION_CACHE_KEY)
    PROCESS_REGISTRY.register(COLLECTION_CACHE_KEY, cache, overwrite=True)
    return cache
