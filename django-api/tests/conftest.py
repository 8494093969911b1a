"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from booking.domain import Lesson
from booking.stores import InMemoryLessonStore, InMemoryOrderStore


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def lesson_store() -> InMemoryLessonStore:
    return InMemoryLessonStore()


@pytest.fixture
def order_store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def math_lesson(lesson_store: InMemoryLessonStore) -> Lesson:
    return lesson_store.add_lesson("math", Decimal("100"), "Hendon", 5)


@pytest.fixture
def art_lesson(lesson_store: InMemoryLessonStore) -> Lesson:
    return lesson_store.add_lesson("art", Decimal("70"), "Colindale", 1)
