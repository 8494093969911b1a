"""Seed the lesson catalog with a default set of lessons."""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS

from booking.stores import DjangoLessonStore

DEFAULT_LESSONS = [
    {"topic": "Math", "location": "Hendon", "price": Decimal("100"), "space": 5},
    {"topic": "English", "location": "Colindale", "price": Decimal("80"), "space": 5},
    {"topic": "Music", "location": "Brent Cross", "price": Decimal("90"), "space": 5},
    {"topic": "Science", "location": "Golders Green", "price": Decimal("95"), "space": 5},
    {"topic": "Art", "location": "Hendon", "price": Decimal("70"), "space": 5},
]


class Command(BaseCommand):
    help = "Create the default lessons when the catalog is empty."

    def add_arguments(self, parser):
        parser.add_argument(
            "--database",
            default=DEFAULT_DB_ALIAS,
            help="Database alias to seed.",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Add the default lessons even if lessons already exist.",
        )

    def handle(self, *args, **options):
        store = DjangoLessonStore(using=options["database"])
        if store.list_lessons() and not options["force"]:
            self.stdout.write("Lessons already present, nothing to seed.")
            return
        for lesson in DEFAULT_LESSONS:
            store.add_lesson(**lesson)
        self.stdout.write(self.style.SUCCESS(f"Seeded {len(DEFAULT_LESSONS)} lessons."))
