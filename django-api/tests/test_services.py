"""Unit tests for LessonService and OrderService.

These test the placement workflow and domain error mapping against the
in-memory stores.
Run with: pytest tests/test_services.py -v
"""

import threading
import uuid
from decimal import Decimal

import pytest

from booking.domain import CartLine, LessonId, OrderRequest
from booking.domain.errors import (
    InsufficientSpaceError,
    InvalidInputError,
    InvalidLessonIdError,
    LessonNotFoundError,
    StoreUnavailableError,
)
from booking.services import LessonService, OrderService, parse_order_request


def _request(*lines: CartLine, name: str = "Ada Lovelace", phone: str = "0123") -> OrderRequest:
    return OrderRequest(name=name, phone=phone, lines=lines)


def _spaces(lesson_store) -> dict:
    return {lesson.id: lesson.space.value for lesson in lesson_store.list_lessons()}


class TestLessonService:
    """Tests for LessonService."""

    def test_get_lesson_invalid_id_raises_error(self, lesson_store):
        """get_lesson raises InvalidLessonIdError for malformed UUID."""
        with pytest.raises(InvalidLessonIdError):
            LessonService(lesson_store).get_lesson("not-a-uuid")

    def test_get_lesson_not_found_raises_error(self, lesson_store):
        """get_lesson raises LessonNotFoundError when store returns None."""
        with pytest.raises(LessonNotFoundError):
            LessonService(lesson_store).get_lesson(str(uuid.uuid4()))

    def test_get_lesson_returns_lesson(self, lesson_store, math_lesson):
        assert LessonService(lesson_store).get_lesson(str(math_lesson.id)) == math_lesson

    def test_update_price_leaves_space_alone(self, lesson_store, math_lesson):
        """Updating price does not touch the seat count."""
        updated = LessonService(lesson_store).update_lesson(str(math_lesson.id), {"price": "150"})

        assert updated.price.amount == Decimal("150")
        assert updated.space.value == 5

    def test_update_space_when_given(self, lesson_store, math_lesson):
        updated = LessonService(lesson_store).update_lesson(str(math_lesson.id), {"space": 9})

        assert updated.space.value == 9

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"price": -1},
            {"price": "abc"},
            {"price": "Infinity"},
            {"space": -1},
            {"space": 1.5},
            {"topic": "  "},
            {"location": 42},
        ],
    )
    def test_update_rejects_invalid_fields(self, lesson_store, math_lesson, fields):
        with pytest.raises(InvalidInputError):
            LessonService(lesson_store).update_lesson(str(math_lesson.id), fields)

        assert lesson_store.get_lesson(math_lesson.id) == math_lesson

    def test_update_missing_lesson(self, lesson_store):
        with pytest.raises(LessonNotFoundError):
            LessonService(lesson_store).update_lesson(str(uuid.uuid4()), {"topic": "x"})


class TestParseOrderRequest:
    """Tests for parse_order_request."""

    def test_cart_shape_joins_first_and_last_name(self):
        lesson_id = uuid.uuid4()

        request = parse_order_request(
            {"firstName": "Ada", "lastName": "Lovelace", "phone": "0123", "cart": [{"id": str(lesson_id)}]}
        )

        assert request.name == "Ada Lovelace"
        assert request.lines == (CartLine(LessonId(lesson_id), seats=1),)

    def test_cart_line_seats(self):
        lesson_id = uuid.uuid4()

        request = parse_order_request(
            {"name": "Ada", "phone": "0123", "cart": [{"id": str(lesson_id), "seats": 2}]}
        )

        assert request.total_seats == 2

    def test_legacy_shape_applies_space_to_every_lesson(self):
        first, second = uuid.uuid4(), uuid.uuid4()

        request = parse_order_request(
            {"name": "Ada", "phone": "0123", "lessonIDs": [str(first), str(second)], "space": 2}
        )

        assert request.lines == (
            CartLine(LessonId(first), seats=2),
            CartLine(LessonId(second), seats=2),
        )

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"phone": "0123", "cart": [{"id": "x"}]},
            {"name": "  ", "phone": "0123", "cart": [{"id": "x"}]},
            {"firstName": "", "lastName": "", "phone": "0123", "cart": [{"id": "x"}]},
            {"name": "Ada", "cart": [{"id": "x"}]},
            {"name": "Ada", "phone": "0123"},
            {"name": "Ada", "phone": "0123", "cart": []},
            {"name": "Ada", "phone": "0123", "cart": "abc"},
            {"name": "Ada", "phone": "0123", "cart": [{"seats": 1}]},
            {"name": "Ada", "phone": "0123", "lessonIDs": "abc", "space": 1},
        ],
    )
    def test_invalid_payloads(self, payload):
        with pytest.raises(InvalidInputError):
            parse_order_request(payload)

    @pytest.mark.parametrize("seats", [0, -1, "2", True])
    def test_invalid_seat_counts(self, seats):
        with pytest.raises(InvalidInputError):
            parse_order_request(
                {"name": "Ada", "phone": "0123", "cart": [{"id": str(uuid.uuid4()), "seats": seats}]}
            )

    def test_malformed_lesson_id(self):
        with pytest.raises(InvalidLessonIdError):
            parse_order_request({"name": "Ada", "phone": "0123", "cart": [{"id": "nope"}]})

    @pytest.mark.parametrize(
        "customer",
        [
            {"name": "A" * 256, "phone": "0123"},
            {"firstName": "A" * 128, "lastName": "B" * 127, "phone": "0123"},
            {"name": "Ada", "phone": "1" * 65},
        ],
    )
    def test_overlong_name_or_phone_rejected(self, customer):
        """Names and phones longer than their columns are input errors."""
        with pytest.raises(InvalidInputError):
            parse_order_request({**customer, "cart": [{"id": str(uuid.uuid4())}]})

    def test_name_and_phone_at_column_size_accepted(self):
        request = parse_order_request(
            {"name": "A" * 255, "phone": "1" * 64, "cart": [{"id": str(uuid.uuid4())}]}
        )

        assert len(request.name) == 255
        assert len(request.phone) == 64


class TestPlaceOrder:
    """Tests for OrderService.place_order."""

    def test_successful_order_reduces_space_and_stores_order(self, lesson_store, order_store, math_lesson):
        """Two seats of a five-seat lesson leave three; lessonIDs repeat per seat."""
        service = OrderService(lesson_store, order_store)

        order = service.place_order(_request(CartLine(math_lesson.id, seats=2)))

        assert lesson_store.get_lesson(math_lesson.id).space.value == 3
        assert order.lesson_ids == (math_lesson.id, math_lesson.id)
        assert order.space == 2
        assert order.name == "Ada Lovelace"
        assert order_store.list_orders() == [order]

    def test_multi_lesson_cart(self, lesson_store, order_store, math_lesson, art_lesson):
        service = OrderService(lesson_store, order_store)

        order = service.place_order(_request(CartLine(math_lesson.id), CartLine(art_lesson.id)))

        assert lesson_store.get_lesson(math_lesson.id).space.value == 4
        assert lesson_store.get_lesson(art_lesson.id).space.value == 0
        assert order.lesson_ids == (math_lesson.id, art_lesson.id)
        assert order.space == 2

    def test_unknown_lesson_leaves_spaces_unchanged(self, lesson_store, order_store, math_lesson):
        service = OrderService(lesson_store, order_store)
        before = _spaces(lesson_store)
        missing = LessonId(uuid.uuid4())

        with pytest.raises(LessonNotFoundError) as excinfo:
            service.place_order(_request(CartLine(math_lesson.id), CartLine(missing)))

        assert excinfo.value.lesson_id == str(missing)
        assert _spaces(lesson_store) == before
        assert order_store.list_orders() == []

    def test_insufficient_space_leaves_spaces_unchanged(self, lesson_store, order_store, math_lesson, art_lesson):
        service = OrderService(lesson_store, order_store)
        before = _spaces(lesson_store)

        with pytest.raises(InsufficientSpaceError) as excinfo:
            service.place_order(_request(CartLine(math_lesson.id), CartLine(art_lesson.id, seats=2)))

        assert excinfo.value.topic == "art"
        assert _spaces(lesson_store) == before
        assert order_store.list_orders() == []

    def test_repeated_lines_are_checked_together(self, lesson_store, order_store, art_lesson):
        """Two one-seat lines for a one-seat lesson are rejected up front."""
        service = OrderService(lesson_store, order_store)

        with pytest.raises(InsufficientSpaceError):
            service.place_order(_request(CartLine(art_lesson.id), CartLine(art_lesson.id)))

        assert lesson_store.get_lesson(art_lesson.id).space.value == 1

    def test_failed_decrement_releases_earlier_lessons(self, lesson_store, order_store, math_lesson, art_lesson):
        """A lesson sold out between check and write rolls back the whole cart."""
        service = OrderService(lesson_store, order_store)
        real_decrement = lesson_store.decrement_space

        def decrement_after_competitor(lesson_id, amount):
            if lesson_id == art_lesson.id:
                real_decrement(art_lesson.id, 1)
            return real_decrement(lesson_id, amount)

        lesson_store.decrement_space = decrement_after_competitor

        with pytest.raises(InsufficientSpaceError):
            service.place_order(_request(CartLine(math_lesson.id, seats=2), CartLine(art_lesson.id)))

        assert lesson_store.get_lesson(math_lesson.id).space.value == 5
        assert order_store.list_orders() == []

    def test_failed_insert_releases_seats(self, lesson_store, order_store, math_lesson):
        service = OrderService(lesson_store, order_store)

        def unavailable(**kwargs):
            raise StoreUnavailableError()

        order_store.add_order = unavailable

        with pytest.raises(StoreUnavailableError):
            service.place_order(_request(CartLine(math_lesson.id, seats=3)))

        assert lesson_store.get_lesson(math_lesson.id).space.value == 5

    def test_concurrent_orders_for_last_seat(self, lesson_store, order_store, art_lesson):
        """Exactly one of two simultaneous one-seat orders gets the last seat."""
        service = OrderService(lesson_store, order_store)
        barrier = threading.Barrier(2)
        outcomes: list[object] = []
        outcomes_lock = threading.Lock()

        def place(name: str) -> None:
            barrier.wait()
            try:
                result: object = service.place_order(_request(CartLine(art_lesson.id), name=name))
            except InsufficientSpaceError as exc:
                result = exc
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=place, args=(name,)) for name in ("first", "second")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        failures = [o for o in outcomes if isinstance(o, InsufficientSpaceError)]
        assert len(outcomes) == 2
        assert len(failures) == 1
        assert len(order_store.list_orders()) == 1
        assert lesson_store.get_lesson(art_lesson.id).space.value == 0


class TestListOrders:
    """Tests for OrderService.list_orders."""

    def test_list_orders(self, lesson_store, order_store, math_lesson):
        service = OrderService(lesson_store, order_store)
        placed = service.place_order(_request(CartLine(math_lesson.id)))

        assert service.list_orders() == [placed]
