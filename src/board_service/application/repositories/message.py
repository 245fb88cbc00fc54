from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Protocol, runtime_checkable

from board_service.domain.entities.message import StoredMessage


class MessageLogStore(Protocol):
    """Append-only, insertion-ordered log of stored messages.

    Implementations raise ``StoreUnavailableError`` or ``StoreCorruptError``
    and never retry.
    """

    async def append(self, message: StoredMessage) -> None:
        """Add one message to the end of the log, atomically."""
        ...

    async def read_all(self) -> list[StoredMessage]:
        """Return an owned copy of every message, in insertion order."""
        ...

    def snapshot(self) -> AbstractAsyncContextManager[Sequence[StoredMessage]]:
        """Yield a read-only consistent view of the log.

        The view must not be used after the block exits.
        """
        ...


@runtime_checkable
class StoreProbe(Protocol):
    async def ping(self) -> None: ...
