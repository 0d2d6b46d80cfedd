"""
Identifier type for stored summary records.
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId


class SummaryId:
    """Opaque identifier for a summary record backed by a MongoDB ObjectId."""

    __slots__ = ("_object_id",)

    def __init__(self, object_id: ObjectId):
        self._object_id = object_id

    @classmethod
    def parse(cls, value: Any) -> Optional["SummaryId"]:
        """
        Parse an identifier from its wire form.

        Args:
            value: Raw identifier, usually a path parameter

        Returns:
            SummaryId if the value is a well-formed 24-character hex ObjectId,
            None otherwise
        """
        if not isinstance(value, str) or len(value) != 24:
            return None
        try:
            return cls(ObjectId(value))
        except (InvalidId, TypeError):
            return None

    @classmethod
    def generate(cls) -> "SummaryId":
        """Generate a fresh identifier."""
        return cls(ObjectId())

    @property
    def object_id(self) -> ObjectId:
        return self._object_id

    def __str__(self) -> str:
        return str(self._object_id)

    def __repr__(self) -> str:
        return f"SummaryId('{self._object_id}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SummaryId):
            return NotImplemented
        return self._object_id == other._object_id

    def __hash__(self) -> int:
        return hash(self._object_id)
