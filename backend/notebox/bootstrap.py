"""
Notebox Backend - Database Connection Bootstrapper
====================================================

What:  Builds the async engine, waits for the database to accept connections,
       and synchronizes the schema before any request is served.
How:   connect_with_retry() runs `SELECT 1` under a tenacity AsyncRetrying
       loop with a fixed delay and a fixed attempt budget. Attempts are
       strictly sequential.
When:  Once per process, before the HTTP server starts listening.

Startup sequence (open_store):
    1. create_engine()       → AsyncEngine, no connection opened yet
    2. connect_with_retry()  → up to 10 attempts, 5 seconds apart
    3. sync_schema()         → CREATE TABLE IF NOT EXISTS for `notes`
    4. SqlNoteRepository     → handed to the app factory

If step 2 exhausts its attempts a StartupError is raised; the entry point
turns that into a non-zero exit status.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from tenacity import AsyncRetrying, RetryCallState, RetryError, stop_after_attempt, wait_fixed

from notebox.config import Settings, settings as default_settings
from notebox.exceptions import StartupError
from notebox.repositories.sql import SqlNoteRepository
from notebox.repositories.tables import metadata

logger = logging.getLogger(__name__)


def create_engine(config: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine described by `config`.

    Pool sizing only applies to server databases; SQLite picks its own pool.
    """
    config = config or default_settings
    url = config.sqlalchemy_url

    engine_kwargs = {}
    if url.get_backend_name() != "sqlite":
        engine_kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=config.db_pool_pre_ping,
            pool_recycle=3600,
        )

    return create_async_engine(url, **engine_kwargs)


async def connect_with_retry(
    engine: AsyncEngine,
    max_attempts: int = 10,
    delay: float = 5.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """
    Block until `engine` can run a query, retrying at a fixed interval.

    Args:
        engine: Engine to probe.
        max_attempts: Total connection attempts, the first one included.
        delay: Seconds to wait after each failed attempt except the last.
        sleep: Awaitable sleep used between attempts.

    Raises:
        StartupError: Every attempt failed.
    """

    def log_failed_attempt(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Database connection attempt %d/%d failed: %s",
            retry_state.attempt_number,
            max_attempts,
            exc,
        )

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(delay),
        after=log_failed_attempt,
        sleep=sleep,
    )

    try:
        async for attempt in retrying:
            with attempt:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
    except RetryError as exc:
        cause = exc.last_attempt.exception()
        logger.critical(
            "Giving up on the database after %d attempts: %s", max_attempts, cause
        )
        raise StartupError(
            attempts=max_attempts,
            context={"error_type": type(cause).__name__},
        ) from cause

    logger.info("Database connection established")


async def sync_schema(engine: AsyncEngine) -> None:
    """Create any missing tables (schema auto-sync)."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database schema synchronized")


async def open_store(
    config: Optional[Settings] = None,
) -> Tuple[AsyncEngine, SqlNoteRepository]:
    """
    Run the full startup sequence and return the engine plus its repository.

    The caller owns the engine and must dispose it on shutdown. On failure
    the engine is disposed here before StartupError propagates.
    """
    config = config or default_settings
    engine = create_engine(config)
    try:
        await connect_with_retry(
            engine,
            max_attempts=config.db_connect_max_attempts,
            delay=config.db_connect_retry_delay,
        )
        await sync_schema(engine)
    except Exception:
        await engine.dispose()
        raise
    return engine, SqlNoteRepository.from_engine(engine)
