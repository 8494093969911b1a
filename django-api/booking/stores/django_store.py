"""Django ORM implementation of the lesson and order stores."""

import functools
import logging
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.db import DEFAULT_DB_ALIAS, InterfaceError, OperationalError
from django.db.models import F

from booking import models
from booking.domain import Lesson, LessonId, Money, Order, OrderId, SeatCount
from booking.domain.errors import (
    InsufficientSpaceError,
    LessonNotFoundError,
    StoreUnavailableError,
)
from booking.stores.interfaces import LessonStore, OrderStore

logger = logging.getLogger(__name__)

UPDATABLE_LESSON_FIELDS = ("topic", "location", "price", "space")


def translate_db_errors(method):
    """Surface lost database connectivity as StoreUnavailableError."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Database unavailable during %s: %s", method.__qualname__, exc)
            raise StoreUnavailableError() from exc

    return wrapper


def _lesson_to_domain(row: models.Lesson) -> Lesson:
    return Lesson(
        id=LessonId(row.id),
        topic=row.topic,
        price=Money(Decimal(row.price)),
        location=row.location,
        space=SeatCount(row.space),
    )


def _order_to_domain(row: models.Order) -> Order:
    return Order(
        id=OrderId(row.id),
        name=row.name,
        phone=row.phone,
        lesson_ids=tuple(LessonId(UUID(value)) for value in row.lesson_ids),
        space=row.space,
        date=row.date,
    )


class DjangoLessonStore(LessonStore):
    """Database-backed lesson store using Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _lessons(self):
        return models.Lesson.objects.using(self._using)

    @translate_db_errors
    def list_lessons(self) -> list[Lesson]:
        return [_lesson_to_domain(row) for row in self._lessons().all()]

    @translate_db_errors
    def get_lesson(self, lesson_id: LessonId) -> Lesson | None:
        row = self._lessons().filter(pk=lesson_id.value).first()
        return _lesson_to_domain(row) if row is not None else None

    @translate_db_errors
    def decrement_space(self, lesson_id: LessonId, amount: int) -> Lesson:
        # UPDATE ... SET space = space - N WHERE id = ? AND space >= N
        matched = (
            self._lessons()
            .filter(pk=lesson_id.value, space__gte=amount)
            .update(space=F("space") - amount)
        )
        row = self._lessons().filter(pk=lesson_id.value).first()
        if row is None:
            raise LessonNotFoundError(str(lesson_id))
        if not matched:
            raise InsufficientSpaceError(row.topic, amount, row.space)
        return _lesson_to_domain(row)

    @translate_db_errors
    def release_space(self, lesson_id: LessonId, amount: int) -> Lesson | None:
        matched = self._lessons().filter(pk=lesson_id.value).update(space=F("space") + amount)
        if not matched:
            return None
        return _lesson_to_domain(self._lessons().get(pk=lesson_id.value))

    @translate_db_errors
    def update_lesson(self, lesson_id: LessonId, fields: Mapping[str, Any]) -> Lesson | None:
        changes = {key: fields[key] for key in UPDATABLE_LESSON_FIELDS if key in fields}
        queryset = self._lessons().filter(pk=lesson_id.value)
        matched = queryset.update(**changes) if changes else queryset.count()
        if not matched:
            return None
        return _lesson_to_domain(self._lessons().get(pk=lesson_id.value))

    @translate_db_errors
    def add_lesson(self, topic: str, price: Decimal, location: str, space: int) -> Lesson:
        row = self._lessons().create(topic=topic, price=price, location=location, space=space)
        return _lesson_to_domain(row)


class DjangoOrderStore(OrderStore):
    """Database-backed order store using Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    def _orders(self):
        return models.Order.objects.using(self._using)

    @translate_db_errors
    def add_order(
        self,
        name: str,
        phone: str,
        lesson_ids: Sequence[LessonId],
        space: int,
    ) -> Order:
        row = self._orders().create(
            name=name,
            phone=phone,
            lesson_ids=[str(lesson_id) for lesson_id in lesson_ids],
            space=space,
        )
        return _order_to_domain(row)

    @translate_db_errors
    def list_orders(self) -> list[Order]:
        return [_order_to_domain(row) for row in self._orders().all()]
