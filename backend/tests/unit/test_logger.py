"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from travelcrm.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG

    configure_logging("WARNING")


def test_json_formatter_copies_known_extras() -> None:
    """Domain identifiers passed via ``extra=`` end up in the JSON payload."""

    record = logging.LogRecord("travelcrm.test", logging.INFO, __file__, 1, "Customer created", None, None)
    record.customer_id = 42
    record.request_id = "req-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Customer created"
    assert payload["customer_id"] == 42
    assert payload["request_id"] == "req-1"
    assert payload["level"] == "INFO"


def test_request_filter_adds_correlation_and_staff(app) -> None:
    """Inside a request, records carry the incoming id and the principal."""

    from flask import g
    from travelcrm.api.deps import Principal
    from travelcrm.core.logger import RequestContextFilter

    record = logging.LogRecord("travelcrm.test", logging.INFO, __file__, 1, "hello", None, None)
    with app.test_request_context("/customers", headers={"X-Correlation-ID": "corr-9"}):
        g.principal = Principal(id=5, username="sinta", email="sinta@example.com", role="STAFF")
        assert RequestContextFilter().filter(record)

    assert record.request_id == "corr-9"
    assert record.staff_id == 5
