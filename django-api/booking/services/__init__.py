from booking.services.lesson_service import LessonService, parse_lesson_id
from booking.services.order_service import OrderService, parse_order_request

__all__ = [
    "LessonService",
    "OrderService",
    "parse_lesson_id",
    "parse_order_request",
]
