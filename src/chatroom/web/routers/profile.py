from fastapi import APIRouter

from chatroom.web.deps import AppDep, SessionIdDep
from chatroom.web.openapi import ErrorResponse, UserResponse

router = APIRouter(tags=["profile"])


@router.get(
    "/user",
    summary="Get current user",
    description="Get the account of the currently authenticated user.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_user(app: AppDep, session_id: SessionIdDep) -> UserResponse:
    return UserResponse(user=await app.get_current_user(session_id))
