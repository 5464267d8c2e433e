from collections.abc import Iterable
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from chatroom.core.core import Service
from chatroom.core.modules.user.models import User
from chatroom.core.modules.user.password import hash_password, verify_password
from chatroom.core.modules.user.validators import normalize_email, validate_credentials
from chatroom.core.tokens import new_user_id
from chatroom.errors import AuthenticationError, ConflictError, ValidationError

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService(Service):
    """Manages user accounts. Nothing is cached; every lookup reads the database."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("email", 1)], unique=True)

    async def find_user(self, user_id: str) -> User | None:
        """Get user by ID, or None if it does not exist."""
        doc = await self._collection.find_one({"_id": user_id})
        return User.model_validate(doc) if doc is not None else None

    async def find_user_by_email(self, email: str) -> User | None:
        """Get user by email (normalized before lookup), or None."""
        doc = await self._collection.find_one({"email": normalize_email(email)})
        return User.model_validate(doc) if doc is not None else None

    async def get_users(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Get several users at once, keyed by ID. Missing IDs are absent from the result."""
        cursor = self._collection.find({"_id": {"$in": list(set(user_ids))}})
        return {user.id: user for user in await User.list_cursor(cursor)}

    async def create_user(self, email: str | None, password: str | None) -> User:
        """Create an unverified user with hashed password."""
        email, password = validate_credentials(email, password)

        if await self.find_user_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User(id=new_user_id(), email=email, password_hash=hash_password(password))
        try:
            await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("Email already registered") from e

        logger.info("user_created", user_id=user.id)
        return user

    async def mark_verified(self, user_id: str) -> bool:
        """Flip the verified flag. Repeating it is harmless.

        Returns False if the user does not exist.
        """
        result = await self._collection.update_one({"_id": user_id}, {"$set": {"verified": True}})
        return result.matched_count > 0

    async def authenticate(self, email: str | None, password: str | None) -> User:
        """Check credentials and return the verified user.

        An unknown email and a wrong password produce the same message. A pending
        verification is reported separately, before the password is checked.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = await self.find_user_by_email(email)
        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.verified:
            raise AuthenticationError("Please verify your email first")

        if not verify_password(user.password_hash, password):
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user
