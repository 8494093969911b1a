"""Domain models representing persisted state and order input.

These are pure domain objects with no API input rules.
Django ORM models are in booking/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from booking.domain.value_objects import LessonId, Money, OrderId, SeatCount


@dataclass(frozen=True)
class Lesson:
    """Domain representation of a Lesson."""

    id: LessonId
    topic: str
    price: Money
    location: str
    space: SeatCount


@dataclass(frozen=True)
class Order:
    """Domain representation of a placed Order.

    ``lesson_ids`` repeats a lesson id once per reserved seat, so ``space``
    always equals ``len(lesson_ids)``.
    """

    id: OrderId
    name: str
    phone: str
    lesson_ids: tuple[LessonId, ...]
    space: int
    date: datetime


@dataclass(frozen=True)
class CartLine:
    """One cart entry: a lesson and the number of seats wanted."""

    lesson_id: LessonId
    seats: int = 1


@dataclass(frozen=True)
class OrderRequest:
    """Validated input for the order placement workflow."""

    name: str
    phone: str
    lines: tuple[CartLine, ...]

    def seats_by_lesson(self) -> dict[LessonId, int]:
        """Total seats per lesson, in the order lessons first appear."""
        totals: dict[LessonId, int] = {}
        for line in self.lines:
            totals[line.lesson_id] = totals.get(line.lesson_id, 0) + line.seats
        return totals

    def reserved_lesson_ids(self) -> tuple[LessonId, ...]:
        return tuple(line.lesson_id for line in self.lines for _ in range(line.seats))

    @property
    def total_seats(self) -> int:
        return sum(line.seats for line in self.lines)
