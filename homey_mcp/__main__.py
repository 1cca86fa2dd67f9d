"""
Entry point: python -m homey_mcp

Loads .env, checks the token, connects to the Homey and serves MCP over
stdio. A failed connection is not fatal; the catalog is still served and
every tool call reports that Homey is not connected.
"""

# Load .env before settings are read. python-dotenv never writes to stdout,
# which belongs to the MCP protocol.
from pathlib import Path
from dotenv import load_dotenv
load_dotenv(Path.cwd() / ".env")

import asyncio
import logging
import sys
from typing import Optional

from .config import HomeySettings
from .exceptions import HomeyError
from .homey import HomeyAPI
from .server import serve_stdio
from .tools import build_registry

logger = logging.getLogger("homey_mcp.main")


async def connect(settings: HomeySettings) -> Optional[HomeyAPI]:
    """Connect once at startup. Returns None when the controller is unavailable."""
    homey = HomeyAPI(
        address=settings.address,
        token=settings.token,
        timeout=settings.timeout,
    )
    if settings.address:
        logger.info("Connecting to Homey locally at %s...", settings.address)
    else:
        logger.info("Connecting to Homey via token without a local address...")

    try:
        await homey.connect()
    except HomeyError as e:
        logger.warning("Failed to connect to Homey: %s", e)
        logger.warning("The server will still start, but tools requiring live data will fail.")
        return None

    logger.info("Connected to Homey!")
    return homey


async def run(settings: HomeySettings) -> None:
    homey = await connect(settings)
    registry = build_registry(homey)
    try:
        await serve_stdio(registry)
    finally:
        if homey is not None:
            await homey.disconnect()


def main() -> None:
    settings = HomeySettings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not settings.token:
        print("HOMEY_TOKEN environment variable is required", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
