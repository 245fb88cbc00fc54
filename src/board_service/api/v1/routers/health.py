from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from board_service.api.deps import StoreDep
from board_service.application.exceptions import StoreError
from board_service.application.repositories.message import StoreProbe

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(store: StoreDep) -> JSONResponse:
    errors: list[str] = []

    if isinstance(store, StoreProbe):
        try:
            await store.ping()
        except StoreError as exc:
            errors.append(f"store: {exc.detail}")

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors},
        )
    return JSONResponse(content={"status": "ready"})
