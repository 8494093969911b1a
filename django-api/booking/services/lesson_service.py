"""Lesson service - catalog reads and administrative updates.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from booking.domain import Lesson, LessonId, Money, SeatCount
from booking.domain.errors import InvalidInputError, InvalidLessonIdError, LessonNotFoundError
from booking.stores.interfaces import LessonStore

logger = logging.getLogger(__name__)


def parse_lesson_id(value: Any) -> LessonId:
    """Parse an external lesson id.

    Raises:
        InvalidLessonIdError: If the value is not a valid UUID string.
    """
    if not isinstance(value, str):
        raise InvalidLessonIdError(str(value))
    try:
        return LessonId.from_string(value)
    except ValueError as exc:
        raise InvalidLessonIdError(value) from exc


class LessonService:
    """Service for lesson catalog operations."""

    def __init__(self, store: LessonStore) -> None:
        self._store = store

    def list_lessons(self) -> list[Lesson]:
        """Return all lessons."""
        return self._store.list_lessons()

    def get_lesson(self, lesson_id: str) -> Lesson:
        """Return a lesson by ID.

        Raises:
            InvalidLessonIdError: If the lesson_id is not a valid UUID.
            LessonNotFoundError: If the lesson does not exist.
        """
        parsed = parse_lesson_id(lesson_id)
        lesson = self._store.get_lesson(parsed)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

    def update_lesson(self, lesson_id: str, fields: Mapping[str, Any]) -> Lesson:
        """Apply a partial update of topic, location, price and space.

        Only the supplied fields change.

        Raises:
            InvalidLessonIdError: If the lesson_id is not a valid UUID.
            InvalidInputError: If no field is supplied or a value is invalid.
            LessonNotFoundError: If the lesson does not exist.
        """
        parsed = parse_lesson_id(lesson_id)
        changes = self._clean_update(fields)
        lesson = self._store.update_lesson(parsed, changes)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        logger.info("Updated lesson %s: %s", lesson_id, ", ".join(sorted(changes)))
        return lesson

    @staticmethod
    def _clean_update(fields: Mapping[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for key in ("topic", "location"):
            if key in fields:
                value = fields[key]
                if not isinstance(value, str) or not value.strip():
                    raise InvalidInputError(f"{key} must be a non-empty string")
                changes[key] = value.strip()
        if "price" in fields:
            try:
                price = Money(Decimal(str(fields["price"])))
            except (InvalidOperation, ValueError) as exc:
                raise InvalidInputError("price must be a non-negative number") from exc
            if not price.amount.is_finite():
                raise InvalidInputError("price must be a non-negative number")
            changes["price"] = price.amount
        if "space" in fields:
            try:
                changes["space"] = SeatCount(fields["space"]).value
            except ValueError as exc:
                raise InvalidInputError("space must be a non-negative integer") from exc
        if not changes:
            raise InvalidInputError("No updatable lesson fields provided")
        return changes
