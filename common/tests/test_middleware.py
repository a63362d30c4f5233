import logging

import pytest


@pytest.mark.django_db
def test_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="common.middleware"):
        client.get("/health/")
    [record] = [r for r in caplog.records if r.name == "common.middleware"]
    assert "GET /health/ -> 200" in record.getMessage()
