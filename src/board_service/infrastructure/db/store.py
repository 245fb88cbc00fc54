from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import insert, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from board_service.application.exceptions import (
    StartupError,
    StoreCorruptError,
    StoreUnavailableError,
)
from board_service.domain.entities.message import StoredMessage
from board_service.infrastructure.db.base import Base
from board_service.infrastructure.db.mappers import message as mapper
from board_service.infrastructure.db.models.message import MessageModel

logger = logging.getLogger(__name__)

SELECT_MESSAGES = select(
    MessageModel.time,
    MessageModel.user,
    MessageModel.content,
).order_by(MessageModel.time.asc(), MessageModel.id.asc())

# Core insert so rowcount comes straight from the cursor.
INSERT_MESSAGE = insert(MessageModel.__table__)

# asyncpg raises OSError (refused, reset, timed out) without a DBAPI wrapper.
DATABASE_ERRORS = (SQLAlchemyError, OSError)


class SqlAlchemyMessageStore:
    """Message log kept in the ``messages`` table.

    Each operation is a single statement in its own session, so consistency
    comes from the database; no application lock is taken.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, message: StoredMessage) -> None:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    INSERT_MESSAGE, mapper.entity_to_params(message),
                )
                await session.commit()
        except DATABASE_ERRORS as exc:
            raise StoreUnavailableError(f"insert failed: {exc}") from exc
        if result.rowcount != 1:
            raise StoreCorruptError(
                f"insert affected {result.rowcount} rows instead of 1",
            )

    async def read_all(self) -> list[StoredMessage]:
        async with self.snapshot() as messages:
            return list(messages)

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[Sequence[StoredMessage]]:
        # Materialized before the session is released.
        yield await self._fetch()

    async def ping(self) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except DATABASE_ERRORS as exc:
            raise StoreUnavailableError(f"ping failed: {exc}") from exc

    async def _fetch(self) -> tuple[StoredMessage, ...]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(SELECT_MESSAGES)
                rows = result.all()
        except DATABASE_ERRORS as exc:
            raise StoreUnavailableError(f"select failed: {exc}") from exc
        return tuple(mapper.row_to_entity(row) for row in rows)


async def prepare_database(engine: AsyncEngine, *, create_schema: bool) -> None:
    """Startup checks: connect, optionally create tables, compile statements."""
    try:
        async with engine.begin() as conn:
            if create_schema:
                await conn.run_sync(Base.metadata.create_all)
            await conn.execute(text("SELECT 1"))
    except DATABASE_ERRORS as exc:
        raise StartupError(f"cannot connect to database: {exc}") from exc

    try:
        for stmt in (SELECT_MESSAGES, INSERT_MESSAGE):
            stmt.compile(dialect=engine.dialect)
    except SQLAlchemyError as exc:
        raise StartupError(f"cannot prepare statements: {exc}") from exc

    logger.info("Database ready (dialect=%s)", engine.dialect.name)
