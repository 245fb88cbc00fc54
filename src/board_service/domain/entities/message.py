from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Message:
    """A message as submitted by a client, before the server stamps it."""

    user: str
    content: str


@dataclass(frozen=True, slots=True)
class StoredMessage:
    time: datetime
    user: str
    content: str
