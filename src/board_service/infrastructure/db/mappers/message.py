from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from board_service.application.exceptions import StoreCorruptError
from board_service.domain.entities.message import StoredMessage


def row_to_entity(row: Sequence[Any]) -> StoredMessage:
    """Map a ``(time, user, content)`` row, rejecting anything malformed."""
    if len(row) != 3:
        raise StoreCorruptError(f"expected 3 columns, got {len(row)}")
    time, user, content = row
    if not isinstance(time, datetime):
        raise StoreCorruptError(f"time column has type {type(time).__name__}")
    if not isinstance(user, str) or not isinstance(content, str):
        raise StoreCorruptError("user and content columns must be text")
    if time.tzinfo is None:
        time = time.replace(tzinfo=timezone.utc)
    return StoredMessage(time=time, user=user, content=content)


def entity_to_params(entity: StoredMessage) -> dict[str, Any]:
    return {
        "time": entity.time,
        "user": entity.user,
        "content": entity.content,
    }
