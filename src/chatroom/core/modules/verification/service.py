from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.core.core import Service
from chatroom.core.modules.verification.models import VerificationToken
from chatroom.core.tokens import random_token
from chatroom.errors import ExpiredTokenError, InvalidTokenError
from chatroom.utils import now_ms

logger = structlog.get_logger(__name__)

TOKEN_LENGTH = 48


class VerificationService(Service):
    """Issues and consumes email verification tokens."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("verification_tokens")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])

    async def create_token(self, user_id: str) -> VerificationToken:
        """Issue a new token for user. Earlier outstanding tokens are left alone."""
        ttl_ms = self.core.config.verification_token_ttl_minutes * 60 * 1000
        token = VerificationToken(id=random_token(TOKEN_LENGTH), user_id=user_id, expires_at=now_ms() + ttl_ms)
        await self._collection.insert_one(token.to_mongo())
        return token

    async def check_token(self, token: str) -> VerificationToken:
        """Look up a live token without consuming it.

        An expired token is deleted, then rejected.
        """
        doc = await self._collection.find_one({"_id": token})
        if doc is None:
            raise InvalidTokenError

        verification_token = VerificationToken.model_validate(doc)
        if now_ms() >= verification_token.expires_at:
            await self._collection.delete_one({"_id": token})
            logger.info("verification_token_expired", user_id=verification_token.user_id)
            raise ExpiredTokenError

        return verification_token

    async def consume_token(self, token: str) -> None:
        """Delete the token. Only one caller can win the delete, so a token is accepted at most once."""
        if await self._collection.find_one_and_delete({"_id": token}) is None:
            raise InvalidTokenError
