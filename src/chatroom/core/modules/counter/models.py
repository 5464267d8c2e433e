"""Auto-incrementing counters for sequential numbering.

Each counter is a document ``{_id: <counter type>, seq: <last issued number>}``
updated with MongoDB atomic operations to prevent duplicates.
"""

from enum import StrEnum


class CounterType(StrEnum):
    """Entities that use sequential numbering."""

    MESSAGE = "message"
