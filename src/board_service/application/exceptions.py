from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppError):
    """Caller input was rejected before touching the store."""


class InvalidUserError(ValidationError):
    pass


class EmptyContentError(ValidationError):
    pass


class StoreError(AppError):
    """Backing store fault."""


class StoreUnavailableError(StoreError):
    pass


class StoreCorruptError(StoreError):
    pass


class ServiceError(AppError):
    pass


class BoardUnavailableError(ServiceError):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} failed: store unavailable")


class StartupError(AppError):
    pass
