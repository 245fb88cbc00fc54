from __future__ import annotations

import logging
from collections.abc import Sequence
from contextlib import asynccontextmanager
from typing import AsyncIterator

from board_service.domain.entities.message import StoredMessage
from board_service.infrastructure.memory.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class InMemoryMessageStore:
    """Process-local message log guarded by a readers-writer lock.

    Bound to the event loop serving requests. Growth is unbounded.
    """

    def __init__(self, messages: Sequence[StoredMessage] = ()) -> None:
        self._messages: list[StoredMessage] = list(messages)
        self._lock = ReadWriteLock()

    async def append(self, message: StoredMessage) -> None:
        async with self._lock.write():
            self._messages.append(message)
            count = len(self._messages)
        logger.debug("Appended message from %s (total=%d)", message.user, count)

    async def read_all(self) -> list[StoredMessage]:
        async with self._lock.read():
            return list(self._messages)

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[Sequence[StoredMessage]]:
        # No copy: appends stay blocked until the caller leaves the block.
        async with self._lock.read():
            yield self._messages

    async def ping(self) -> None:
        return None
