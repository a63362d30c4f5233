"""
Project-wide DRF exception handler.

Services raise the typed errors from `messaging.exceptions`; this handler
turns them into DRF exceptions so every error response keeps DRF's
standard shape.  Anything else is left to DRF's default handler.
"""
import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

from messaging.exceptions import MessagingError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


class StorageFailure(exceptions.APIException):
    status_code = 500
    default_detail = "Could not complete the request. Please try again."
    default_code = "storage_error"


def api_exception_handler(exc, context):
    if isinstance(exc, MessagingError):
        exc = _to_api_exception(exc, context)
    return exception_handler(exc, context)


def _to_api_exception(exc: MessagingError, context) -> exceptions.APIException:
    if isinstance(exc, ValidationError):
        return exceptions.ValidationError(exc.detail)
    if isinstance(exc, NotFoundError):
        return exceptions.NotFound(exc.detail)
    if isinstance(exc, StorageError):
        view = context.get("view")
        logger.error(
            "Storage failure in %s: %s",
            type(view).__name__ if view is not None else "unknown view",
            exc,
            exc_info=exc,
        )
        return StorageFailure()
    return exceptions.APIException(str(exc))
