from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from chatroom.core.core import Service
from chatroom.core.modules.counter.models import CounterType


class CounterService(Service):
    """Service for managing auto-incrementing counters."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("counters")

    async def get_next_sequence(self, counter_type: CounterType) -> int:
        """Atomically increment and return the next sequence number for a type."""
        result = await self._collection.find_one_and_update(
            {"_id": str(counter_type)},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

        # If it was just created (upserted), seq will be 1
        # Otherwise, it returns the incremented value
        return int(result["seq"])
