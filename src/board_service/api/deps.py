"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from board_service.application.ports.clock import Clock
from board_service.application.repositories.message import MessageLogStore
from board_service.domain.entities.board import ServerMetadata


def get_store(request: Request) -> MessageLogStore:
    return request.app.state.store


def get_metadata(request: Request) -> ServerMetadata:
    return request.app.state.metadata


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


StoreDep = Annotated[MessageLogStore, Depends(get_store)]
MetadataDep = Annotated[ServerMetadata, Depends(get_metadata)]
ClockDep = Annotated[Clock, Depends(get_clock)]
