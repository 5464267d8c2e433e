from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.core.core import Service
from chatroom.core.modules.counter.models import CounterType
from chatroom.core.modules.message.models import Message, MessageView
from chatroom.errors import ValidationError
from chatroom.utils import now_ms

logger = structlog.get_logger(__name__)

MAX_MESSAGE_LENGTH = 1000
LIST_LIMIT = 100


class MessageService(Service):
    """Append-only message log of the shared room."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("messages")

    async def on_start(self) -> None:
        """Create indexes for polling by creation time."""
        await self._collection.create_index([("created_at", 1), ("_id", 1)])
        await self._collection.create_index([("user_id", 1)])

    async def post_message(self, user_id: str, text: str | None) -> Message:
        """Append a message. The text is stored trimmed."""
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message cannot be empty")
        if len(text) > MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message is too long (max {MAX_MESSAGE_LENGTH} characters)")

        message_id = await self.core.services.counter.get_next_sequence(CounterType.MESSAGE)
        message = Message(id=message_id, user_id=user_id, message=text, created_at=now_ms())
        await self._collection.insert_one(message.to_mongo())
        logger.debug("message_posted", message_id=message.id, user_id=user_id)
        return message

    async def list_messages(self, after: int = 0) -> list[MessageView]:
        """Messages created strictly after `after` (ms), oldest first, at most LIST_LIMIT.

        Ties on created_at are ordered by message ID. Clients poll with the largest
        created_at they have seen. Messages whose author no longer exists are skipped.
        """
        cursor = self._collection.find({"created_at": {"$gt": after}}).sort([("created_at", 1), ("_id", 1)]).limit(LIST_LIMIT)
        messages = await Message.list_cursor(cursor)
        authors = await self.core.services.user.get_users(m.user_id for m in messages)
        return [MessageView.from_domain(m, authors[m.user_id]) for m in messages if m.user_id in authors]
