from booking.handlers.views import (
    LessonDetailView,
    LessonListView,
    LessonUpdateView,
    OrderListView,
    health,
)

__all__ = [
    "health",
    "LessonListView",
    "LessonDetailView",
    "LessonUpdateView",
    "OrderListView",
]
