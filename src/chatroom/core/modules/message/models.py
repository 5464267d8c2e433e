from pydantic import BaseModel, ConfigDict, Field

from chatroom.core.db import MongoModel
from chatroom.core.modules.user.models import User


class Message(MongoModel):
    """Chat message in the shared room. Append-only, never edited."""

    id: int = Field(alias="_id", serialization_alias="id")  # type: ignore[assignment]
    user_id: str
    message: str
    created_at: int  # ms since epoch


class MessageView(BaseModel):
    """Message with its author's email (API representation)."""

    id: int = Field(..., description="Sequential message ID")
    message: str = Field(..., description="Message text")
    email: str = Field(..., description="Author email")
    created_at: int = Field(..., alias="createdAt", description="Creation time, ms since epoch")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, message: Message, author: User) -> "MessageView":
        """Create view model from domain models."""
        return cls(id=message.id, message=message.message, email=author.email, created_at=message.created_at)
