"""
Error taxonomy status codes and the observability hooks.
"""

import logging
import warnings

import pytest
from starlette.requests import Request

from app.core.config import settings
from app.core.exceptions import ConflictError, FormatError, NotFoundError, ValidationError
from app.core.integrations.observability import record_exception, setup_observability


@pytest.mark.parametrize(
    "exc_class, status_code",
    [(ValidationError, 422), (NotFoundError, 404), (ConflictError, 409), (FormatError, 500)],
)
def test_status_codes_without_deprecation_warnings(exc_class, status_code):
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        exc = exc_class("boom", details={"field": "x"})

    assert exc.status_code == status_code
    assert exc.details == {"field": "x"}


def test_observability_hooks_only_log(caplog):
    request = Request({"type": "http", "method": "GET", "path": "/api/v1/quotes", "headers": []})

    with caplog.at_level(logging.INFO, logger="app.core.integrations.observability"):
        setup_observability()
        record_exception(RuntimeError("db down"), request)

    setup_record, error_record = caplog.records
    assert setup_record.service_name == settings.OTEL_SERVICE_NAME
    assert error_record.levelno == logging.ERROR
    assert error_record.exception_message == "db down"
    assert error_record.path == "/api/v1/quotes"
