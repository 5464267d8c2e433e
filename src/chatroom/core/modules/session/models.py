"""Session management models."""

from typing import NewType

from pydantic import BaseModel

from chatroom.core.db import MongoModel

SessionId = NewType("SessionId", str)


class Session(MongoModel):
    """User authentication session. The document ID is the opaque session identifier."""

    user_id: str
    expires_at: int  # ms since epoch


class SessionCookie(BaseModel):
    """Cookie carrying the session identifier to the client.

    An empty value with max_age=0 tells the client to drop its stored cookie.
    """

    name: str
    value: str
    max_age: int  # seconds
    secure: bool = True
    httponly: bool = True
    samesite: str = "lax"
    path: str = "/"
