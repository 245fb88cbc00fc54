from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import ArgumentError, NoSuchModuleError

from board_service.application.exceptions import StartupError
from board_service.application.repositories.message import MessageLogStore
from board_service.config import Settings
from board_service.infrastructure.db.session import build_engine, build_session_factory
from board_service.infrastructure.db.store import SqlAlchemyMessageStore, prepare_database
from board_service.infrastructure.memory.store import InMemoryMessageStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_store(settings: Settings) -> AsyncIterator[MessageLogStore]:
    """Build the configured store and release its resources on exit."""
    if settings.BOARD_STORE == "memory":
        logger.info("Using in-memory message store")
        yield InMemoryMessageStore()
        return

    if not settings.DB_CONN_STRING:
        raise StartupError(
            "a database connection string is required, either via --database "
            "or the DB_CONN_STRING environment variable",
        )

    try:
        engine = build_engine(settings.DB_CONN_STRING, settings)
    except (ArgumentError, NoSuchModuleError) as exc:
        raise StartupError(f"invalid database connection string: {exc}") from exc

    try:
        await prepare_database(engine, create_schema=settings.DB_CREATE_SCHEMA)
        logger.info("Using database message store")
        yield SqlAlchemyMessageStore(build_session_factory(engine))
    finally:
        await engine.dispose()
        logger.info("Database engine disposed")
