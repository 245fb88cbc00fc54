from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from board_service.application.exceptions import (
    BoardUnavailableError,
    EmptyContentError,
    InvalidUserError,
    StoreError,
)
from board_service.application.ports.clock import Clock
from board_service.application.repositories.message import MessageLogStore
from board_service.domain.entities.board import Board, ServerMetadata
from board_service.domain.entities.message import Message, StoredMessage
from board_service.domain.value_objects.limits import MAX_USER_LENGTH, user_length
from board_service.services.snapshot import capture_board

logger = logging.getLogger(__name__)


def validate_message(message: Message) -> None:
    if not message.user or user_length(message.user) > MAX_USER_LENGTH:
        raise InvalidUserError(
            f"user must be between 1 and {MAX_USER_LENGTH} bytes long",
        )
    if not message.content:
        raise EmptyContentError("content must not be empty")


async def post_message(
    message: Message,
    store: MessageLogStore,
    clock: Clock,
) -> StoredMessage:
    """Validate and append one message, stamped with the server time.

    Validation happens before any store access. Store failures are logged
    and surfaced as ``BoardUnavailableError``; nothing is retried.
    The stored message is returned for callers that want the server time;
    the HTTP route discards it.
    """
    validate_message(message)

    stored = StoredMessage(
        time=clock.now(),
        user=message.user,
        content=message.content,
    )
    try:
        await store.append(stored)
    except StoreError as exc:
        logger.error("post_message: store append failed: %s", exc.detail or exc)
        raise BoardUnavailableError("post_message") from exc
    return stored


@asynccontextmanager
async def open_board(
    store: MessageLogStore,
    metadata: ServerMetadata,
    clock: Clock,
) -> AsyncIterator[Board]:
    """Board valid for the duration of the block; serialize inside it."""
    try:
        async with capture_board(store, metadata, clock) as board:
            yield board
    except StoreError as exc:
        logger.error("get_board: store read failed: %s", exc.detail or exc)
        raise BoardUnavailableError("get_board") from exc


async def get_board(
    store: MessageLogStore,
    metadata: ServerMetadata,
    clock: Clock,
) -> Board:
    """Return a detached board whose messages are an owned copy."""
    async with open_board(store, metadata, clock) as board:
        return Board(
            title=board.title,
            time=board.time,
            started_at=board.started_at,
            messages=tuple(board.messages),
        )
