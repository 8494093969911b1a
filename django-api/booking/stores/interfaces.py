"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from booking.domain import Lesson, LessonId, Order


class LessonStore(ABC):
    """Interface for lesson persistence operations."""

    @abstractmethod
    def list_lessons(self) -> list[Lesson]:
        """Return all lessons in insertion order."""
        ...

    @abstractmethod
    def get_lesson(self, lesson_id: LessonId) -> Lesson | None:
        """Return a lesson by ID, or None if not found."""
        ...

    @abstractmethod
    def decrement_space(self, lesson_id: LessonId, amount: int) -> Lesson:
        """Atomically take ``amount`` seats from a lesson.

        The check and the write are one step: the seat count is reduced only
        if it stays non-negative.

        Raises:
            LessonNotFoundError: If the lesson does not exist.
            InsufficientSpaceError: If fewer than ``amount`` seats are left.
        """
        ...

    @abstractmethod
    def release_space(self, lesson_id: LessonId, amount: int) -> Lesson | None:
        """Atomically give ``amount`` seats back, or None if not found."""
        ...

    @abstractmethod
    def update_lesson(self, lesson_id: LessonId, fields: Mapping[str, Any]) -> Lesson | None:
        """Set the given subset of topic/location/price/space.

        Returns the updated lesson, or None if not found.
        """
        ...

    @abstractmethod
    def add_lesson(self, topic: str, price: Decimal, location: str, space: int) -> Lesson:
        """Create a lesson. Used for seeding."""
        ...


class OrderStore(ABC):
    """Interface for order persistence operations."""

    @abstractmethod
    def add_order(
        self,
        name: str,
        phone: str,
        lesson_ids: Sequence[LessonId],
        space: int,
    ) -> Order:
        """Persist a new order, assigning its id and date."""
        ...

    @abstractmethod
    def list_orders(self) -> list[Order]:
        """Return all orders ordered by date ascending."""
        ...
