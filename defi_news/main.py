#!/usr/bin/env python3
"""
DeFi News MCP Server
Caches DeFi news from curated sites and serves it over MCP (stdio or HTTP) and a JSON API.
"""

import argparse
import asyncio
import signal
import sys
from typing import Optional, Sequence

import uvicorn

from defi_news.api.app import create_app
from defi_news.config import Settings, load_settings
from defi_news.container import NewsServices, build_services
from defi_news.errors import StartupConfigError
from defi_news.mcp_server import create_mcp
from defi_news.utils.logging import get_logger, set_level

logger = get_logger("defi-news.main")


def setup_signal_handlers():
    """Unix only: turn SIGTERM into a clean exit"""
    def signal_handler(signum, frame):
        logger.info(f"🔔 Received signal {signum}, initiating graceful shutdown...")
        sys.exit(0)

    if sys.platform != 'win32':
        signal.signal(signal.SIGTERM, signal_handler)


async def run_stdio(services: NewsServices) -> None:
    mcp = create_mcp(services)
    services.scheduler.start()
    logger.info("DeFi News MCP server running on stdio")
    try:
        await mcp.run_async(transport="stdio")
    finally:
        await services.close()


def run_http(services: NewsServices, settings: Settings) -> None:
    app = create_app(services)
    host, port = settings.HOST, settings.PORT
    logger.info(f"🚀 DeFi News MCP server running on http://{host}:{port}")
    logger.info(f"📊 Health check: http://{host}:{port}/health")
    logger.info(f"🔍 Search API: POST http://{host}:{port}/api/search")
    logger.info(f"🔌 MCP HTTP endpoint: http://{host}:{port}/mcp")
    uvicorn.run(app, host=host, port=port, log_level=settings.LOG_LEVEL.lower())


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="defi-news-mcp", description="DeFi news MCP server")
    parser.add_argument("--stdio", action="store_true", help="serve MCP over stdio instead of HTTP")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
    except StartupConfigError as e:
        logger.error(f"❌ Server failed to start: {e.message}")
        return 1

    set_level(settings.LOG_LEVEL)
    setup_signal_handlers()
    services = build_services(settings)

    try:
        if args.stdio:
            asyncio.run(run_stdio(services))
        else:
            run_http(services, settings)
    except KeyboardInterrupt:
        logger.info("🛑 Server shutdown requested by user (KeyboardInterrupt)")
    except Exception as e:
        logger.error(f"💥 Server crashed with unhandled exception: {e}")
        raise
    finally:
        logger.info("👋 DeFi News MCP Server process ended")
    return 0


if __name__ == "__main__":
    sys.exit(main())
