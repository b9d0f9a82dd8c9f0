"""Console entry point.

Usage: meta-storage [--debug] [<server-url> <client-id> <secret>]
"""

import asyncio
import os
import sys
from typing import Optional

from cli.config import Config
from cli.repl import repl_loop
from common.logging_config import setup_logging
from storage_client import StorageClient


async def run(config: Config) -> None:
    """Build the client from config and run the REPL until exit."""
    async with StorageClient(
        config.get_server_url(),
        config.get_client_id(),
        config.get_secret(),
        timeout=config.get_timeout(),
    ) as client:
        await repl_loop(client)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the console."""
    args = list(sys.argv[1:] if argv is None else argv)

    debug = '--debug' in args
    if debug:
        args.remove('--debug')
    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'INFO')

    logger = setup_logging('cli', log_level=log_level)
    setup_logging('storage_client', log_level=log_level)
    if debug:
        logger.info("Debug logging enabled")

    config = Config()
    config.override(*args[:3])

    missing = config.missing_identity()
    if missing:
        print(f"Missing {', '.join(missing)}: pass <server-url> <client-id> <secret> "
              f"or set STORAGE_CLIENT_ID / STORAGE_SECRET.", file=sys.stderr)
        return 1

    logger.info("Console starting...")
    try:
        asyncio.run(run(config))
    except Exception as e:
        logger.error(f"Console error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Console exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
