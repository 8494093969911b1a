"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Lesson(models.Model):
    """Persistence model for lessons."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    topic = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    location = models.CharField(max_length=255)
    space = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.topic} @ {self.location}"


class Order(models.Model):
    """Persistence model for orders.

    lesson_ids is a JSON list of lesson UUID strings, one entry per seat.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=64)
    lesson_ids = models.JSONField(default=list)
    space = models.PositiveIntegerField()
    date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date"]
        indexes = [
            models.Index(fields=["date"], name="booking_order_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.space} seat(s)"
