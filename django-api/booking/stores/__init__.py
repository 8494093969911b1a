from booking.stores.django_store import DjangoLessonStore, DjangoOrderStore
from booking.stores.interfaces import LessonStore, OrderStore
from booking.stores.memory_store import InMemoryLessonStore, InMemoryOrderStore

__all__ = [
    "LessonStore",
    "OrderStore",
    "DjangoLessonStore",
    "DjangoOrderStore",
    "InMemoryLessonStore",
    "InMemoryOrderStore",
]
