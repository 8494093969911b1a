"""Domain error codes for the booking module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_LESSON_ID = "INVALID_LESSON_ID"
    LESSON_NOT_FOUND = "LESSON_NOT_FOUND"
    INSUFFICIENT_SPACE = "INSUFFICIENT_SPACE"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidInputError(DomainError):
    """Raised when request input is missing or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)


class InvalidLessonIdError(DomainError):
    """Raised when a lesson ID is not in the accepted format."""

    def __init__(self, lesson_id: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_LESSON_ID,
            message="Invalid lesson ID format",
        )
        self.lesson_id = lesson_id


class LessonNotFoundError(DomainError):
    """Raised when a lesson is not found."""

    def __init__(self, lesson_id: str) -> None:
        super().__init__(
            code=ErrorCode.LESSON_NOT_FOUND,
            message=f"Lesson with ID {lesson_id} not found",
        )
        self.lesson_id = lesson_id


class InsufficientSpaceError(DomainError):
    """Raised when a lesson has fewer seats left than requested."""

    def __init__(self, topic: str, requested: int, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_SPACE,
            message=f"Not enough spaces available for lesson {topic}",
        )
        self.topic = topic
        self.requested = requested
        self.available = available


class StoreUnavailableError(DomainError):
    """Raised when the backing database cannot be reached."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Database not available",
        )
