"""
Notebox Backend - Process Entry Point
=======================================

What:  The `notebox` console script.
How:   Opens the store first (connect with retry, sync schema), then builds
       the app around the opened repository and runs uvicorn on the same
       event loop. The HTTP socket is only bound after the database answered.

Exit status:
    0  clean shutdown
    1  database unreachable for the whole retry budget
"""

import asyncio
import logging
import sys
from typing import Optional

import uvicorn

from notebox.bootstrap import open_store
from notebox.config import Settings, settings
from notebox.exceptions import StartupError
from notebox.main import create_app, setup_logging

logger = logging.getLogger(__name__)


async def serve(config: Optional[Settings] = None) -> None:
    config = config or settings
    engine, repository = await open_store(config)
    try:
        app = create_app(repository=repository, config=config)
        server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=config.host,
                port=config.port,
                log_config=None,  # keep the handlers installed by setup_logging
            )
        )
        logger.info("Server is running on port %d", config.port)
        await server.serve()
    finally:
        await engine.dispose()


def main() -> None:
    setup_logging(settings)
    try:
        asyncio.run(serve(settings))
    except StartupError as e:
        logger.critical("Error starting server: %s", e.message)
        sys.exit(1)


if __name__ == "__main__":
    main()
