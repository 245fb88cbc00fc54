from __future__ import annotations

# Measured in UTF-8 bytes.
MAX_USER_LENGTH = 32


def user_length(user: str) -> int:
    return len(user.encode("utf-8"))
