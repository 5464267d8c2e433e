from fastapi import APIRouter, Request, Response
from pydantic import BaseModel, Field

from chatroom.web.cookies import apply_cookie
from chatroom.web.deps import AppDep, SessionIdDep
from chatroom.web.openapi import ErrorResponse, OkResponse

router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    """Email and password, used by both registration and login.

    Fields are optional here so that missing values get the same message as empty ones.
    """

    email: str | None = Field(None, description="Email address")
    password: str | None = Field(None, description="Password, at least 8 characters for registration")


@router.post(
    "/register",
    summary="Register account",
    description="Create an account and send a verification link to the email address.",
    operation_id="register",
    responses={
        200: {"description": "Account created, verification email sent"},
        400: {"model": ErrorResponse, "description": "Missing fields, short password or email already registered"},
        500: {"model": ErrorResponse, "description": "Email service not configured or sending failed"},
    },
)
async def register(data: CredentialsRequest, app: AppDep, request: Request) -> OkResponse:
    base_url = app.config.base_url or str(request.base_url)
    await app.register(data.email, data.password, base_url)
    return OkResponse(message="Check your email for verification link")


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with email and password. The session is returned as a cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        401: {"model": ErrorResponse, "description": "Invalid credentials or email not verified"},
    },
)
async def login(data: CredentialsRequest, app: AppDep, response: Response) -> OkResponse:
    cookie = await app.login(data.email, data.password)
    apply_cookie(response, cookie)
    return OkResponse(message="Login successful")


@router.post(
    "/logout",
    summary="End session",
    description="Invalidate the current session, if any, and clear the session cookie.",
    operation_id="logout",
    responses={
        200: {"description": "Logged out"},
    },
)
async def logout(app: AppDep, session_id: SessionIdDep, response: Response) -> OkResponse:
    cookie = await app.logout(session_id)
    apply_cookie(response, cookie)
    return OkResponse(message="Logout successful")
