from __future__ import annotations

import asyncio
import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class TimeoutMiddleware:
    """Answer 408 when a request takes longer than ``timeout`` seconds.

    Pure ASGI so the cancelled handler unwinds in its own task.
    """

    def __init__(self, app: ASGIApp, timeout: float) -> None:
        self.app = app
        self._timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(self.app(scope, receive, send_wrapper), self._timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "%s %s timed out after %.1fs",
                scope["method"],
                scope["path"],
                self._timeout,
            )
            if response_started:
                raise
            response = JSONResponse(status_code=408, content={"detail": "request timed out"})
            await response(scope, receive, send)
