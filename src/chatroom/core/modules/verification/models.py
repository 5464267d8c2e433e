"""Email verification token models."""

from chatroom.core.db import MongoModel


class VerificationToken(MongoModel):
    """Single-use proof of control over an email address.

    The token string itself is the document ID. Valid while it exists and now < expires_at.
    """

    user_id: str
    expires_at: int  # ms since epoch

    @property
    def token(self) -> str:
        return self.id
