from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.core.core import Service
from chatroom.core.modules.session.models import Session, SessionCookie, SessionId
from chatroom.core.modules.user.models import User
from chatroom.core.tokens import random_token
from chatroom.errors import AuthenticationError
from chatroom.utils import now_ms

logger = structlog.get_logger(__name__)

SESSION_ID_LENGTH = 40


class SessionService(Service):
    """Service for managing user sessions. All state lives in the database."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # Single index for user_id (for finding sessions by user)
        await self._collection.create_index([("user_id", 1)])

    @property
    def ttl_seconds(self) -> int:
        return self.core.config.session_ttl_days * 24 * 60 * 60

    async def create_session(self, user_id: str) -> Session:
        session = Session(
            id=random_token(SESSION_ID_LENGTH),
            user_id=user_id,
            expires_at=now_ms() + self.ttl_seconds * 1000,
        )
        await self._collection.insert_one(session.to_mongo())
        logger.info("session_created", user_id=user_id)
        return session

    async def validate_session(self, session_id: SessionId) -> tuple[User, Session]:
        """Resolve a session to its user.

        Expired sessions are deleted on sight. Unknown, expired and orphaned sessions
        all raise AuthenticationError.
        """
        doc = await self._collection.find_one({"_id": session_id})
        if doc is None:
            raise AuthenticationError("Invalid session")

        session = Session.model_validate(doc)
        if now_ms() >= session.expires_at:
            await self._collection.delete_one({"_id": session_id})
            raise AuthenticationError("Invalid session")

        user = await self.core.services.user.find_user(session.user_id)
        if user is None:
            raise AuthenticationError("Invalid session")

        return user, session

    async def get_authenticated_user(self, session_id: SessionId) -> User:
        user, _ = await self.validate_session(session_id)
        return user

    async def invalidate_session(self, session_id: SessionId) -> None:
        """Invalidate a session by removing it from the database. Unknown IDs are ignored."""
        await self._collection.delete_one({"_id": session_id})

    def session_cookie(self, session: Session) -> SessionCookie:
        """Build the cookie that hands session to the client."""
        return SessionCookie(
            name=self.core.config.session_cookie_name,
            value=session.id,
            max_age=self.ttl_seconds,
            secure=self.core.config.session_cookie_secure,
        )

    def blank_cookie(self) -> SessionCookie:
        """Build a cookie that clears any stored session on the client."""
        return SessionCookie(
            name=self.core.config.session_cookie_name,
            value="",
            max_age=0,
            secure=self.core.config.session_cookie_secure,
        )
