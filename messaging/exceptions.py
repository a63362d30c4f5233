"""
Domain errors raised by the messaging services.

Views never build error responses themselves: these exceptions travel up
to ``common.exceptions.api_exception_handler`` which maps them onto DRF
responses.
"""


class MessagingError(Exception):
    """Base class for every messaging failure."""

    default_detail = "Messaging request failed."

    def __init__(self, detail=None):
        if detail is None:
            detail = self.default_detail
        self.detail = detail
        super().__init__(detail)


class ValidationError(MessagingError):
    """Bad input. ``detail`` maps field names to messages."""

    default_detail = "Invalid input."

    def __init__(self, detail=None, field=None):
        if field is not None:
            detail = {field: [detail or self.default_detail]}
        super().__init__(detail)


class NotFoundError(MessagingError):
    default_detail = "Not found."


class StorageError(MessagingError):
    default_detail = "Could not store the message, please try again."
