"""
Unit tests for logging helpers and the request logging middleware.
"""

import json
import logging

from medclause.core.logging_config import (
    ContextAdapter, JSONFormatter, filter_sensitive_data, truncate_large_data,
)
from medclause.middleware.logging_middleware import _sanitize_body


class TestLoggingHelpers:
    """Tests for sensitive-data filtering and truncation."""

    def test_masks_credentials_and_patient_details(self):
        data = {
            "medication_name": "Aspirin",
            "patient_info": "72 years old, on warfarin",
            "nested": [{"api_key": "sk-123"}],
        }
        filtered = filter_sensitive_data(data)
        assert filtered["medication_name"] == "Aspirin"
        assert filtered["patient_info"] == "***FILTERED***"
        assert filtered["nested"][0]["api_key"] == "***FILTERED***"
        assert data["patient_info"] == "72 years old, on warfarin"

    def test_truncate(self):
        assert truncate_large_data("short", 10) == "short"
        assert truncate_large_data("x" * 20, 10).startswith("x" * 10 + "... (truncated")

    def test_sanitize_body(self):
        body = json.dumps({"symptoms": "cough", "patient_info": "45 y/o"}).encode()
        rendered = _sanitize_body(body, "application/json")
        assert "cough" in rendered
        assert "45 y/o" not in rendered
        assert _sanitize_body(b"--boundary", "multipart/form-data") is None


class TestStructuredLogging:
    """Tests for ContextAdapter and JSONFormatter."""

    def test_context_reaches_json_output(self):
        records = []

        class Capture(logging.Handler):
            def emit(self, record):
                records.append(record)

        base = logging.getLogger("medclause.tests.context")
        base.propagate = False
        base.setLevel(logging.INFO)
        handler = Capture()
        base.addHandler(handler)
        try:
            adapter = ContextAdapter(base, {"page": "chat-assistant"})
            adapter.info("Request started", extra={"extra_fields": {"attempt": 1}})
        finally:
            base.removeHandler(handler)

        output = json.loads(JSONFormatter().format(records[0]))
        assert output["message"] == "Request started"
        assert output["page"] == "chat-assistant"
        assert output["attempt"] == 1
