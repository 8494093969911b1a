"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Leave domain error mapping to booking.handlers.exceptions
- Never contain business logic
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from booking.handlers.serializers import LessonSerializer, LessonUpdateSerializer, OrderSerializer
from booking.services import LessonService, OrderService, parse_order_request
from booking.stores import DjangoLessonStore, DjangoOrderStore

logger = logging.getLogger(__name__)


def get_lesson_service() -> LessonService:
    return LessonService(DjangoLessonStore())


def get_order_service() -> OrderService:
    return OrderService(DjangoLessonStore(), DjangoOrderStore())


@require_GET
def health(request: HttpRequest) -> HttpResponse:
    """Handler for GET /"""
    return HttpResponse("Server is running", content_type="text/plain")


class LessonListView(APIView):
    """Handler for GET /lessons"""

    def get(self, request: Request) -> Response:
        lessons = get_lesson_service().list_lessons()
        return Response(LessonSerializer(lessons, many=True).data)


class LessonDetailView(APIView):
    """Handler for GET /test-lesson/{lesson_id}"""

    def get(self, request: Request, lesson_id: str) -> Response:
        lesson = get_lesson_service().get_lesson(lesson_id)
        return Response(LessonSerializer(lesson).data)


class LessonUpdateView(APIView):
    """Handler for PUT /lessons/{lesson_id}"""

    def put(self, request: Request, lesson_id: str) -> Response:
        serializer = LessonUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        lesson = get_lesson_service().update_lesson(lesson_id, serializer.validated_data)
        return Response(LessonSerializer(lesson).data)


class OrderListView(APIView):
    """Handler for GET and POST /orders"""

    def get(self, request: Request) -> Response:
        orders = get_order_service().list_orders()
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request: Request) -> Response:
        logger.debug("Order request body: %s", request.data)
        order = get_order_service().place_order(parse_order_request(request.data))
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
