# iconhub/cli.py
from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

import uvicorn

from iconhub import __version__
from iconhub.app.factory import createApp
from iconhub.app.globals import config, initConfig
from iconhub.core.errors import IconhubError
from iconhub.core.logging import configureLogging
from iconhub.icons.types import countIcons
from iconhub.plugin.virtual_module import RESOLVED_VIRTUAL_MODULE_ID, PluginContext, createPlugin

logger = logging.getLogger(__name__)

__all__ = ["buildParser", "main"]



def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="iconhub", description="Aggregate icon packs and keep icon type declarations current.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    commands = {}
    for name, helpText in (
        ("sync", "Load every icon source and regenerate the type declarations if they are stale."),
        ("module", "Print the virtual module source."),
        ("serve", "Serve the virtual module and icon index over HTTP."),
    ):
        cmd = sub.add_parser(name, help=helpText)
        cmd.add_argument("--root", default=".", help="Project root (default: current directory).")
        cmd.add_argument("--config", default=None, help="Config file (default: <root>/iconhub.json5).")
        commands[name] = cmd

    commands["serve"].add_argument("--host", default=None, help="Bind address (default: http.host).")
    commands["serve"].add_argument("--port", type=int, default=None, help="Port (default: http.port).")
    return parser



async def _run(args: argparse.Namespace) -> int:
    service = initConfig(args.root, configFile=args.config)
    configureLogging(service)
    options = service.integrationOptions()
    provider = createPlugin(options, PluginContext(root=service.root))

    if args.command == "module":
        source = await provider.load(RESOLVED_VIRTUAL_MODULE_ID)
        print(source)
        return 0

    collections = await provider.aggregator.aggregate()
    print(f"{len(collections)} collection(s), {countIcons(collections)} icon(s)")
    print(f"types: {provider.aggregator.typesPath}")
    return 0



def _serve(args: argparse.Namespace) -> int:
    app = createApp(args.root, configFile=args.config)
    host = args.host or config("http.host", "127.0.0.1")
    port = args.port or int(config("http.port", 5174))
    logger.info("Serving icons on http://%s:%d", host, port)
    # log_config=None keeps the handlers configureLogging() installed
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0



def main(argv: Sequence[str] | None = None) -> int:
    args = buildParser().parse_args(argv)
    try:
        if args.command == "serve":
            return _serve(args)
        return asyncio.run(_run(args))
    except IconhubError as err:
        logger.debug("iconhub %s failed", args.command, exc_info=True)
        print(f"iconhub: {err}", file=sys.stderr)
        return 1



if __name__ == "__main__":
    sys.exit(main())
