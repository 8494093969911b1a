from booking.domain.models import CartLine, Lesson, Order, OrderRequest
from booking.domain.value_objects import LessonId, Money, OrderId, SeatCount

__all__ = [
    "Lesson",
    "Order",
    "CartLine",
    "OrderRequest",
    "LessonId",
    "OrderId",
    "Money",
    "SeatCount",
]
