"""Shared room endpoints. Clients poll the list endpoint with the newest createdAt they have seen."""

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from chatroom.web.deps import AppDep, SessionIdDep
from chatroom.web.openapi import ErrorResponse, MessagesResponse, OkResponse

router: APIRouter = APIRouter(tags=["messages"])

# Range of a BSON int64
MIN_CURSOR = -(2**63)
MAX_CURSOR = 2**63 - 1


class PostMessageRequest(BaseModel):
    """Request to post a message to the room."""

    message: str | None = Field(None, description="Message text, 1 to 1000 characters after trimming")


@router.get(
    "/messages",
    summary="List messages",
    description="Up to 100 messages created after the given timestamp, oldest first. No session required.",
    operation_id="listMessages",
    responses={
        200: {"description": "Messages newer than `after`"},
        400: {"model": ErrorResponse, "description": "`after` is not a 64-bit integer"},
        500: {"model": ErrorResponse, "description": "Database failure"},
    },
)
async def list_messages(
    app: AppDep,
    after: Annotated[
        int, Query(ge=MIN_CURSOR, le=MAX_CURSOR, description="Only messages created after this time (ms since epoch)")
    ] = 0,
) -> MessagesResponse:
    return MessagesResponse(messages=await app.list_messages(after))


@router.post(
    "/messages",
    summary="Post message",
    description="Append a message to the shared room.",
    operation_id="postMessage",
    responses={
        200: {"description": "Message posted"},
        400: {"model": ErrorResponse, "description": "Message empty or too long"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def post_message(request: PostMessageRequest, app: AppDep, session_id: SessionIdDep) -> OkResponse:
    await app.post_message(session_id, request.message)
    return OkResponse(message="Message posted")
