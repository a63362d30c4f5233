from rest_framework import status

from common.exceptions import api_exception_handler
from messaging.exceptions import MessagingError, NotFoundError, StorageError, ValidationError


def test_validation_error_keeps_field_detail():
    resp = api_exception_handler(ValidationError("Required.", field="content"), {})
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.data == {"content": ["Required."]}


def test_not_found_maps_to_404():
    resp = api_exception_handler(NotFoundError("Conversation not found."), {})
    assert resp.status_code == status.HTTP_404_NOT_FOUND
    assert resp.data == {"detail": "Conversation not found."}


def test_storage_error_hides_details(caplog):
    resp = api_exception_handler(StorageError("db exploded"), {})
    assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "db exploded" not in str(resp.data["detail"])
    assert resp.data["detail"].code == "storage_error"
    assert any("Storage failure" in r.getMessage() for r in caplog.records)


def test_base_messaging_error_is_500():
    resp = api_exception_handler(MessagingError(), {})
    assert resp.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR


def test_other_exceptions_left_to_django():
    assert api_exception_handler(RuntimeError("boom"), {}) is None
