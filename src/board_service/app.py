from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from board_service.api.middleware.timeout import TimeoutMiddleware
from board_service.api.middleware.tracing import RequestTracingMiddleware
from board_service.api.v1.routers import board, health
from board_service.application.exceptions import ServiceError, ValidationError
from board_service.application.ports.clock import Clock, NonDecreasingClock
from board_service.application.repositories.message import MessageLogStore
from board_service.config import Settings, settings as default_settings
from board_service.domain.entities.board import ServerMetadata
from board_service.infrastructure.factory import open_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    async with AsyncExitStack() as stack:
        if getattr(app.state, "store", None) is None:
            app.state.store = await stack.enter_async_context(
                open_store(app.state.settings),
            )
        logger.info(
            "Board %r started at %s",
            app.state.metadata.title,
            app.state.metadata.started_at.isoformat(),
        )
        yield
    logger.info("Board %r stopped", app.state.metadata.title)


def create_app(
    settings: Settings | None = None,
    *,
    store: MessageLogStore | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    settings = settings or default_settings
    clock = clock or NonDecreasingClock()

    app = FastAPI(
        title=settings.BOARD_TITLE,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock
    app.state.metadata = ServerMetadata(title=settings.BOARD_TITLE, started_at=clock.now())
    app.state.store = store

    app.add_middleware(TimeoutMiddleware, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestTracingMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(board.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Rejected message: %s", exc.detail)
        return JSONResponse(status_code=400, content={"detail": exc.detail})

    @app.exception_handler(ServiceError)
    async def _service(_req: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": "internal server error"})
