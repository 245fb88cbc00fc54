from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from board_service.domain.entities.message import StoredMessage


@dataclass(frozen=True, slots=True)
class ServerMetadata:
    """Process-wide board metadata, fixed when the app is built."""

    title: str
    started_at: datetime


@dataclass(frozen=True, slots=True)
class Board:
    """Point-in-time view of the message log plus server metadata.

    ``messages`` may be a live view owned by the store; it is only valid
    inside the snapshot block that produced the board.
    """

    title: str
    time: datetime
    started_at: datetime
    messages: Sequence[StoredMessage]
