from fastapi import Response

from chatroom.core.modules.session.models import SessionCookie


def apply_cookie(response: Response, cookie: SessionCookie) -> None:
    """Write a session cookie (or a blank one) onto the response."""
    response.set_cookie(
        key=cookie.name,
        value=cookie.value,
        max_age=cookie.max_age,
        path=cookie.path,
        secure=cookie.secure,
        httponly=cookie.httponly,
        samesite=cookie.samesite,  # type: ignore[arg-type]
    )
