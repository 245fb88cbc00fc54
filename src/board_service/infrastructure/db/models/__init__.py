"""Import all models so Base.metadata knows every table."""
from board_service.infrastructure.db.models.message import MessageModel

__all__ = [
    "MessageModel",
]
