"""Serializers for transforming domain models to API responses.

LessonUpdateSerializer is the only input serializer: it checks request
format before the service applies domain rules.
"""

from rest_framework import serializers

from booking.domain import Order


class LessonSerializer(serializers.Serializer):
    """Serializer for Lesson domain model."""

    id = serializers.UUIDField(source="id.value")
    topic = serializers.CharField()
    price = serializers.DecimalField(
        source="price.amount",
        max_digits=10,
        decimal_places=2,
        coerce_to_string=False,
    )
    location = serializers.CharField()
    space = serializers.IntegerField(source="space.value")


class OrderSerializer(serializers.Serializer):
    """Serializer for Order domain model."""

    id = serializers.UUIDField(source="id.value")
    name = serializers.CharField()
    phone = serializers.CharField()
    lessonIDs = serializers.SerializerMethodField()
    space = serializers.IntegerField()
    date = serializers.DateTimeField()

    def get_lessonIDs(self, order: Order) -> list[str]:
        return [str(lesson_id) for lesson_id in order.lesson_ids]


class LessonUpdateSerializer(serializers.Serializer):
    """Request body for PUT /lessons/{id}. Every field is optional."""

    topic = serializers.CharField(max_length=255, required=False)
    location = serializers.CharField(max_length=255, required=False)
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
    )
    space = serializers.IntegerField(min_value=0, required=False)
