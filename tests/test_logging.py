import structlog

from leadcapture.core.logging import SERVICE_NAME, add_service_context, request_log_context


def test_request_log_context_binds_and_restores():
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(worker="w1")

    with request_log_context("req-123", method="POST", path="/api/forms/demo/submit"):
        assert structlog.contextvars.get_contextvars() == {
            "worker": "w1",
            "request_id": "req-123",
            "method": "POST",
            "path": "/api/forms/demo/submit",
        }

    assert structlog.contextvars.get_contextvars() == {"worker": "w1"}
    structlog.contextvars.clear_contextvars()


def test_add_service_context_keeps_explicit_values():
    event = add_service_context(None, "info", {"event": "fetch.failed"})
    assert event["service"] == SERVICE_NAME
    assert event["environment"] == "testing"

    event = add_service_context(None, "info", {"event": "x", "environment": "staging"})
    assert event["environment"] == "staging"
