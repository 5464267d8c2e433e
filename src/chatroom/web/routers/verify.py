"""Verification link target. Answers with HTML because it is opened from an email, not by the API client."""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from chatroom.errors import DependencyError, ExpiredTokenError, InvalidTokenError
from chatroom.web.cookies import apply_cookie
from chatroom.web.deps import AppDep

router = APIRouter(tags=["verify"])

CHAT_PATH = "/chat"


def render_error_page(message: str, status_code: int) -> HTMLResponse:
    return HTMLResponse(f"<h1>{escape(message)}</h1>", status_code=status_code)


@router.get(
    "/verify",
    summary="Verify email",
    description="Consume a verification token, start a session and redirect to the chat.",
    operation_id="verifyEmail",
    response_class=HTMLResponse,
    responses={
        302: {"description": "Verified; session cookie set, redirect to the chat"},
        400: {"description": "Invalid or expired link (HTML page)"},
    },
)
async def verify_email(app: AppDep, token: str | None = None) -> Response:
    try:
        cookie = await app.verify_email(token)
    except (InvalidTokenError, ExpiredTokenError) as e:
        return render_error_page(str(e), 400)
    except DependencyError:
        return render_error_page("Verification failed", 500)

    response = RedirectResponse(CHAT_PATH, status_code=302)
    apply_cookie(response, cookie)
    return response
