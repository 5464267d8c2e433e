from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from chatroom.app import App
from chatroom.core.modules.session.models import SessionId

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_id(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> SessionId | None:
    """Read the session identifier from the Authorization Bearer header or the session cookie.

    Validation is left to the App so that endpoints which tolerate a missing session (logout) can share this.
    """
    # Check Bearer token first
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return SessionId(credentials.credentials)

    # Fallback to cookie
    session_cookie = request.cookies.get(app.config.session_cookie_name)
    if session_cookie:
        return SessionId(session_cookie)

    return None


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionIdDep = Annotated[SessionId | None, Depends(get_session_id)]
