from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.config import Config
from chatroom.core.core import Core
from chatroom.core.db import store_errors
from chatroom.core.modules.message.models import MessageView
from chatroom.core.modules.session.models import SessionCookie, SessionId
from chatroom.core.modules.user.models import UserView
from chatroom.errors import InvalidTokenError

logger = structlog.get_logger(__name__)


class App:
    """Facade for all application operations, checks authentication before delegating to Core."""

    def __init__(self, config: Config, database: AsyncDatabase[dict[str, Any]] | None = None) -> None:
        self._core = Core(config, database)

    @property
    def config(self) -> Config:
        return self._core.config

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Account lifecycle ===
    async def register(self, email: str | None, password: str | None, base_url: str) -> None:
        """Create an unverified account and email it a verification link.

        The user and token writes are independent and are kept if sending the email fails.
        """
        with store_errors("Registration failed"):
            user = await self._core.services.user.create_user(email, password)
            token = await self._core.services.verification.create_token(user.id)
        verify_url = self._core.services.mail.build_verify_url(base_url, token.token)
        await self._core.services.mail.send_verification_email(user.email, verify_url)
        logger.info("user_registered", user_id=user.id)

    async def verify_email(self, token: str | None) -> SessionCookie:
        """Mark the token's user verified, consume the token and open a session.

        Tokens whose owner no longer exists are discarded and rejected.
        """
        if not token:
            raise InvalidTokenError("Invalid verification link")
        with store_errors("Verification failed"):
            verification_token = await self._core.services.verification.check_token(token)
            user_id = verification_token.user_id
            # The token is consumed only after the verified flag is written
            if not await self._core.services.user.mark_verified(user_id):
                await self._core.services.verification.consume_token(token)
                raise InvalidTokenError
            await self._core.services.verification.consume_token(token)
            session = await self._core.services.session.create_session(user_id)
        logger.info("email_verified", user_id=user_id)
        return self._core.services.session.session_cookie(session)

    async def login(self, email: str | None, password: str | None) -> SessionCookie:
        """Authenticate user and create session."""
        with store_errors("Login failed"):
            user = await self._core.services.user.authenticate(email, password)
            session = await self._core.services.session.create_session(user.id)
        return self._core.services.session.session_cookie(session)

    async def logout(self, session_id: SessionId | None) -> SessionCookie:
        """Invalidate the session if there is one. Always returns a blank cookie."""
        if session_id:
            with store_errors("Logout failed"):
                await self._core.services.session.invalidate_session(session_id)
        return self._core.services.session.blank_cookie()

    async def get_current_user(self, session_id: SessionId | None) -> UserView:
        """Get current authenticated user profile."""
        with store_errors("Failed to get user"):
            current_user = await self._core.services.access.ensure_authenticated(session_id)
        return UserView.from_domain(current_user)

    # === Messages ===
    async def post_message(self, session_id: SessionId | None, text: str | None) -> None:
        """Post to the shared room (authenticated users only)."""
        with store_errors("Failed to post message"):
            current_user = await self._core.services.access.ensure_authenticated(session_id)
            await self._core.services.message.post_message(current_user.id, text)

    async def list_messages(self, after: int = 0) -> list[MessageView]:
        """Messages newer than `after`; readable without a session."""
        with store_errors("Failed to get messages"):
            return await self._core.services.message.list_messages(after)
