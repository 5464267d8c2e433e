from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Self

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor
from pymongo.errors import PyMongoError

from chatroom.errors import DependencyError

logger = structlog.get_logger(__name__)


class MongoModel(BaseModel):
    id: str = Field(alias="_id", serialization_alias="id")

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Re-raise database failures as DependencyError carrying a short, user-safe message."""
    try:
        yield
    except PyMongoError as e:
        logger.exception("database_error", error=str(e))
        raise DependencyError(message) from e
