"""Shared test fixtures."""
from __future__ import annotations

from collections.abc import Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator

import pytest

from board_service.application.exceptions import StoreError
from board_service.domain.entities.board import ServerMetadata
from board_service.domain.entities.message import StoredMessage

EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@dataclass
class FixedClock:
    """Clock returning ``start`` and advancing by ``step`` on every reading."""

    start: datetime = EPOCH
    step: timedelta = timedelta(0)
    readings: int = 0

    def now(self) -> datetime:
        value = self.start + self.step * self.readings
        self.readings += 1
        return value


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def metadata() -> ServerMetadata:
    return ServerMetadata(title="TestChat", started_at=EPOCH)


def make_stored_message(
    *,
    user: str = "alice",
    content: str = "hi",
    time: datetime = EPOCH,
) -> StoredMessage:
    return StoredMessage(time=time, user=user, content=content)


@dataclass
class FakeMessageStore:
    """List-backed store with failure injection."""

    _messages: list[StoredMessage] = field(default_factory=list)
    fail_with: StoreError | None = None
    append_calls: int = 0
    read_calls: int = 0

    async def append(self, message: StoredMessage) -> None:
        self.append_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        self._messages.append(message)

    async def read_all(self) -> list[StoredMessage]:
        async with self.snapshot() as messages:
            return list(messages)

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[Sequence[StoredMessage]]:
        self.read_calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        yield tuple(self._messages)
