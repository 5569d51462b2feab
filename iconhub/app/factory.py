# iconhub/app/factory.py
from __future__ import annotations
import logging
from collections.abc import Sequence
from pathlib import Path

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iconhub.app.globals import config, initConfig
from iconhub.core.logging import configureLogging
from iconhub.plugin.routes import createIconRouter
from iconhub.plugin.virtual_module import PluginContext, VirtualModuleProvider, createPlugin

__all__ = ["createApp"]



def createApp(
    root: str | Path = ".",
    *,
    configFile: str | Path | None = None,
    provider: VirtualModuleProvider | None = None,
    extraRouters: Sequence[APIRouter] = (),
) -> FastAPI:
    """
    Dev server for one project root. The provider (and with it the process
    collection cache) lives as long as the app, so the registry is read once
    and local icon edits show up on the next request.
    """
    service = initConfig(root, configFile=configFile)
    configureLogging(service)
    logger = logging.getLogger(__name__)

    if provider is None:
        provider = createPlugin(service.integrationOptions(), PluginContext(root=service.root))

    app = FastAPI(title="iconhub")
    app.state.iconProvider = provider

    corsOrigins = config("http.cors.allowOrigins", [])
    if not isinstance(corsOrigins, list):
        logger.warning("Config: http.cors.allowOrigins must be a list, ignoring %r", corsOrigins)
        corsOrigins = []
    if corsOrigins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=corsOrigins,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    app.include_router(createIconRouter(provider))
    for router in extraRouters:
        app.include_router(router)

    logger.debug("Dev server app created for '%s'", service.root)
    return app
