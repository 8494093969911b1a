"""Order placement workflow.

A cart is checked in full before any seat is taken, then every lesson is
decremented through the store's atomic conditional update. If a decrement or
the order insert fails, seats already taken for this cart are given back, so
a cart is reserved entirely or not at all.
"""

import logging
from collections.abc import Mapping
from typing import Any

from booking.domain import CartLine, LessonId, Order, OrderRequest
from booking.domain.errors import (
    DomainError,
    InsufficientSpaceError,
    InvalidInputError,
    LessonNotFoundError,
)
from booking.services.lesson_service import parse_lesson_id
from booking.stores.interfaces import LessonStore, OrderStore

logger = logging.getLogger(__name__)

# Column sizes of booking.models.Order
NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 64


def _within_length(value: str, key: str, max_length: int) -> str:
    if len(value) > max_length:
        raise InvalidInputError(f"{key} must be at most {max_length} characters")
    return value


def _required_text(payload: Mapping[str, Any], key: str, max_length: int) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{key} is required")
    return _within_length(value.strip(), key, max_length)


def _customer_name(payload: Mapping[str, Any]) -> str:
    if "firstName" in payload or "lastName" in payload:
        parts = []
        for key in ("firstName", "lastName"):
            value = payload.get(key)
            if value is None:
                continue
            if not isinstance(value, str):
                raise InvalidInputError(f"{key} must be a string")
            if value.strip():
                parts.append(value.strip())
        if not parts:
            raise InvalidInputError("name is required")
        return _within_length(" ".join(parts), "name", NAME_MAX_LENGTH)
    return _required_text(payload, "name", NAME_MAX_LENGTH)


def _seat_count(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError(f"{label} must be a positive integer")
    return value


def _cart_lines(cart: Any) -> tuple[CartLine, ...]:
    if not isinstance(cart, list) or not cart:
        raise InvalidInputError("cart must be a non-empty list")
    lines = []
    for item in cart:
        if not isinstance(item, Mapping) or "id" not in item:
            raise InvalidInputError("Each cart item must be an object with an id")
        seats = _seat_count(item.get("seats", 1), "seats")
        lines.append(CartLine(lesson_id=parse_lesson_id(item["id"]), seats=seats))
    return tuple(lines)


def _legacy_lines(lesson_ids: Any, space: Any) -> tuple[CartLine, ...]:
    if not isinstance(lesson_ids, list) or not lesson_ids:
        raise InvalidInputError("lessonIDs must be a non-empty array")
    seats = _seat_count(space, "space")
    return tuple(CartLine(lesson_id=parse_lesson_id(value), seats=seats) for value in lesson_ids)


def parse_order_request(payload: Any) -> OrderRequest:
    """Build an OrderRequest from a request body.

    Accepts ``{firstName, lastName, phone, cart: [{id, seats?}]}`` and the
    older ``{name, phone, lessonIDs, space}`` where every listed lesson gets
    ``space`` seats.

    Raises:
        InvalidInputError: If a required field is missing or malformed.
        InvalidLessonIdError: If a lesson id is not a valid UUID.
    """
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Order body must be a JSON object")
    name = _customer_name(payload)
    phone = _required_text(payload, "phone", PHONE_MAX_LENGTH)
    if "cart" in payload:
        lines = _cart_lines(payload["cart"])
    elif "lessonIDs" in payload:
        lines = _legacy_lines(payload["lessonIDs"], payload.get("space", 1))
    else:
        raise InvalidInputError("cart must be a non-empty list")
    return OrderRequest(name=name, phone=phone, lines=lines)


class OrderService:
    """Service for placing and listing orders."""

    def __init__(self, lesson_store: LessonStore, order_store: OrderStore) -> None:
        self._lessons = lesson_store
        self._orders = order_store

    def list_orders(self) -> list[Order]:
        """Return all orders."""
        return self._orders.list_orders()

    def place_order(self, request: OrderRequest) -> Order:
        """Reserve every seat in the cart and store the order.

        Raises:
            LessonNotFoundError: If a cart lesson does not exist.
            InsufficientSpaceError: If a lesson has fewer seats than requested.
            StoreUnavailableError: If the database cannot be reached.
        """
        wanted = request.seats_by_lesson()
        try:
            self._check_availability(wanted)
        except DomainError as exc:
            logger.warning("Order rejected for %s: %s", request.name, exc)
            raise

        taken: list[tuple[LessonId, int]] = []
        try:
            for lesson_id, seats in wanted.items():
                self._lessons.decrement_space(lesson_id, seats)
                taken.append((lesson_id, seats))
            order = self._orders.add_order(
                name=request.name,
                phone=request.phone,
                lesson_ids=request.reserved_lesson_ids(),
                space=request.total_seats,
            )
        except Exception as exc:
            logger.warning("Order for %s failed after validation, releasing seats: %s", request.name, exc)
            self._release(taken)
            raise

        logger.info("Placed order %s for %s: %d seat(s)", order.id, order.name, order.space)
        return order

    def _check_availability(self, wanted: Mapping[LessonId, int]) -> None:
        for lesson_id, seats in wanted.items():
            lesson = self._lessons.get_lesson(lesson_id)
            if lesson is None:
                raise LessonNotFoundError(str(lesson_id))
            if not lesson.space.covers(seats):
                raise InsufficientSpaceError(lesson.topic, seats, lesson.space.value)

    def _release(self, taken: list[tuple[LessonId, int]]) -> None:
        for lesson_id, seats in reversed(taken):
            try:
                self._lessons.release_space(lesson_id, seats)
            except Exception:
                logger.exception("Could not release %d seat(s) of lesson %s", seats, lesson_id)
