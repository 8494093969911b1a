"""Map domain errors to HTTP responses.

Installed as REST_FRAMEWORK["EXCEPTION_HANDLER"]. Unexpected exceptions are
logged and answered with a generic 500; internal details never leave.
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from booking.domain.errors import DomainError, ErrorCode

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_LESSON_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.LESSON_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INSUFFICIENT_SPACE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(code: str, message: str, **extra) -> dict:
    return {"error": code, "message": message, **extra}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        return Response(error_body(exc.code.value, exc.message), status=STATUS_BY_CODE[exc.code])

    response = exception_handler(exc, context)
    if response is not None:
        if isinstance(exc, exceptions.ValidationError):
            response.data = error_body(
                ErrorCode.VALIDATION_ERROR.value,
                "Invalid request",
                details=response.data,
            )
        else:
            # Django's Http404 carries no default_code
            fallback = "not_found" if response.status_code == status.HTTP_404_NOT_FOUND else "error"
            code = getattr(exc, "default_code", fallback).upper()
            response.data = error_body(code, str(response.data.get("detail", "")))
        return response

    view = context.get("view")
    logger.error("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
    return Response(
        error_body(ErrorCode.INTERNAL_ERROR.value, "Internal server error"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
