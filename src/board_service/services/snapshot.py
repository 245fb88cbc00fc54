from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from board_service.application.ports.clock import Clock
from board_service.application.repositories.message import MessageLogStore
from board_service.domain.entities.board import Board, ServerMetadata


@asynccontextmanager
async def capture_board(
    store: MessageLogStore,
    metadata: ServerMetadata,
    clock: Clock,
) -> AsyncIterator[Board]:
    """Yield a board built from one consistent view of the store.

    ``time`` is read once the view is established, so the messages reflect
    the log at an instant no later than ``time``. Whatever the store holds to
    keep the view consistent (the in-memory read lock) is held until the
    block exits; serialize inside the block.
    """
    async with store.snapshot() as messages:
        yield Board(
            title=metadata.title,
            time=clock.now(),
            started_at=metadata.started_at,
            messages=messages,
        )
