"""In-memory stores.

Same contract as the Django stores; used by unit tests and local demos.
A single lock per store makes each check-then-mutate step atomic.
"""

import threading
import uuid
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from booking.domain import Lesson, LessonId, Money, Order, OrderId, SeatCount
from booking.domain.errors import InsufficientSpaceError, LessonNotFoundError
from booking.stores.interfaces import LessonStore, OrderStore


class InMemoryLessonStore(LessonStore):
    """Dict-backed lesson store."""

    def __init__(self) -> None:
        self._lessons: dict[LessonId, Lesson] = {}
        self._lock = threading.Lock()

    def list_lessons(self) -> list[Lesson]:
        with self._lock:
            return list(self._lessons.values())

    def get_lesson(self, lesson_id: LessonId) -> Lesson | None:
        with self._lock:
            return self._lessons.get(lesson_id)

    def decrement_space(self, lesson_id: LessonId, amount: int) -> Lesson:
        with self._lock:
            lesson = self._lessons.get(lesson_id)
            if lesson is None:
                raise LessonNotFoundError(str(lesson_id))
            if not lesson.space.covers(amount):
                raise InsufficientSpaceError(lesson.topic, amount, lesson.space.value)
            updated = replace(lesson, space=SeatCount(lesson.space.value - amount))
            self._lessons[lesson_id] = updated
            return updated

    def release_space(self, lesson_id: LessonId, amount: int) -> Lesson | None:
        with self._lock:
            lesson = self._lessons.get(lesson_id)
            if lesson is None:
                return None
            updated = replace(lesson, space=SeatCount(lesson.space.value + amount))
            self._lessons[lesson_id] = updated
            return updated

    def update_lesson(self, lesson_id: LessonId, fields: Mapping[str, Any]) -> Lesson | None:
        with self._lock:
            lesson = self._lessons.get(lesson_id)
            if lesson is None:
                return None
            changes: dict[str, Any] = {}
            for key in ("topic", "location"):
                if key in fields:
                    changes[key] = fields[key]
            if "price" in fields:
                changes["price"] = Money(Decimal(fields["price"]))
            if "space" in fields:
                changes["space"] = SeatCount(fields["space"])
            updated = replace(lesson, **changes)
            self._lessons[lesson_id] = updated
            return updated

    def add_lesson(self, topic: str, price: Decimal, location: str, space: int) -> Lesson:
        lesson = Lesson(
            id=LessonId(uuid.uuid4()),
            topic=topic,
            price=Money(Decimal(price)),
            location=location,
            space=SeatCount(space),
        )
        with self._lock:
            self._lessons[lesson.id] = lesson
        return lesson


class InMemoryOrderStore(OrderStore):
    """List-backed order store."""

    def __init__(self) -> None:
        self._orders: list[Order] = []
        self._lock = threading.Lock()

    def add_order(
        self,
        name: str,
        phone: str,
        lesson_ids: Sequence[LessonId],
        space: int,
    ) -> Order:
        order = Order(
            id=OrderId(uuid.uuid4()),
            name=name,
            phone=phone,
            lesson_ids=tuple(lesson_ids),
            space=space,
            date=datetime.now(timezone.utc),
        )
        with self._lock:
            self._orders.append(order)
        return order

    def list_orders(self) -> list[Order]:
        with self._lock:
            return list(self._orders)
