from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageRequest(BaseModel):
    """A message posted by a client."""

    user: str
    content: str

    model_config = ConfigDict(extra="forbid", title="Message")


class StoredMessageResponse(BaseModel):
    """A stored message."""

    time: datetime
    user: str
    content: str

    model_config = ConfigDict(from_attributes=True, title="StoredMessage")


class BoardResponse(BaseModel):
    """A locked state of the board, ready to be serialized."""

    title: str
    time: datetime
    started_at: datetime
    messages: list[StoredMessageResponse]

    model_config = ConfigDict(from_attributes=True, title="Board")
