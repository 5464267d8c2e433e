from pydantic import BaseModel, Field

from chatroom.core.db import MongoModel
from chatroom.utils import now_ms


class User(MongoModel):
    """Registered account. Starts unverified; verified once by the email link."""

    email: str
    password_hash: str  # salt:sha256hex
    verified: bool = False
    created_at: int = Field(default_factory=now_ms)  # ms since epoch


class UserView(BaseModel):
    """User account information (API representation)."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="Email address")
    verified: bool = Field(..., description="Whether the email address has been confirmed")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, email=user.email, verified=user.verified)
