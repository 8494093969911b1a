from django.urls import path

from booking.handlers import (
    LessonDetailView,
    LessonListView,
    LessonUpdateView,
    OrderListView,
    health,
)

urlpatterns = [
    path("", health, name="health"),
    path("lessons", LessonListView.as_view(), name="lesson-list"),
    path("lessons/<str:lesson_id>", LessonUpdateView.as_view(), name="lesson-update"),
    path("test-lesson/<str:lesson_id>", LessonDetailView.as_view(), name="lesson-detail"),
    path("orders", OrderListView.as_view(), name="order-list"),
]
