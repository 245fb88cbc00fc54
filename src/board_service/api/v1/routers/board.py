from __future__ import annotations

from fastapi import APIRouter, Response, status

from board_service.api.deps import ClockDep, MetadataDep, StoreDep
from board_service.api.v1.schemas.board import BoardResponse, MessageRequest
from board_service.domain.entities.message import Message
from board_service.services import board_service

router = APIRouter(tags=["board"])


@router.get("/", response_model=BoardResponse)
async def get_board(
    store: StoreDep,
    metadata: MetadataDep,
    clock: ClockDep,
) -> Response:
    # Serialized inside the snapshot so the read lock covers it; the
    # response_model only documents the shape.
    async with board_service.open_board(store, metadata, clock) as board:
        body = BoardResponse.model_validate(board).model_dump_json()
    return Response(content=body, media_type="application/json")


@router.post("/", status_code=status.HTTP_200_OK)
async def post_message(
    body: MessageRequest,
    store: StoreDep,
    clock: ClockDep,
) -> Response:
    await board_service.post_message(
        Message(user=body.user, content=body.content), store, clock,
    )
    return Response(status_code=status.HTTP_200_OK)
