"""Logging configuration — enrichers, sink selection and JSON output.

Tests cover:
    - Console sink always present; telemetry/Papertrail only when configured
    - Enricher properties and the request id reach formatted records
    - configure_logging replaces its previous handlers
    - The Application Insights sink is an OpenTelemetry LoggingHandler
    - Unknown log formats rejected as ConfigurationError
"""

import json
import logging
import logging.handlers

import pytest
from opentelemetry.sdk._logs import LoggingHandler

from website.core.errors import ConfigurationError
from website.infrastructure import observability
from website.infrastructure.observability import (
    EnrichmentFilter, JSONFormatter, build_handlers, build_telemetry_handler,
    configure_logging, request_id_var, shutdown_logging, validate_log_format,
)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    level = logging.root.level
    yield
    shutdown_logging()
    logging.root.setLevel(level)


def _record(msg="hello", **extra):
    record = logging.LogRecord("website.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_only_console_sink_without_optional_settings(settings):
    handlers = build_handlers(settings)
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)


def test_papertrail_sink_enabled_by_hostname(settings):
    settings = settings.model_copy(
        update={"papertrail_hostname": "localhost", "papertrail_port": 51400},
    )
    handlers = build_handlers(settings)
    try:
        syslog = [h for h in handlers if isinstance(h, logging.handlers.SysLogHandler)]
        assert len(syslog) == 1
        assert syslog[0].address == ("localhost", 51400)
    finally:
        for handler in handlers:
            handler.close()


def test_telemetry_sink_enabled_by_connection_string(settings, monkeypatch):
    calls = []

    def fake_telemetry_handler(connection_string, settings):
        calls.append(connection_string)
        return logging.NullHandler()

    monkeypatch.setattr(observability, "build_telemetry_handler", fake_telemetry_handler)
    settings = settings.model_copy(
        update={"applicationinsights_connection_string": "InstrumentationKey=abc"},
    )

    handlers = build_handlers(settings)

    assert calls == ["InstrumentationKey=abc"]
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_telemetry_handler_exports_through_opentelemetry(settings, monkeypatch):
    monkeypatch.setenv("APPLICATIONINSIGHTS_STATSBEAT_DISABLED_ALL", "true")
    handler = build_telemetry_handler(
        "InstrumentationKey=00000000-0000-0000-0000-000000000000", settings,
    )
    try:
        assert isinstance(handler, LoggingHandler)
        assert handler.level == logging.NOTSET
    finally:
        handler.close()


def test_unknown_log_format_rejected(settings):
    settings = settings.model_copy(update={"log_format": "xml"})
    with pytest.raises(ConfigurationError):
        build_handlers(settings)


def test_validate_log_format_accepts_known_formats():
    assert validate_log_format("json") == "json"
    assert validate_log_format("text") == "text"
    with pytest.raises(ConfigurationError):
        validate_log_format("JSON ")


def test_configure_logging_is_idempotent(settings):
    first = configure_logging(settings)
    second = configure_logging(settings)

    for handler in first:
        assert handler not in logging.root.handlers
    for handler in second:
        assert handler in logging.root.handlers


def test_configure_logging_sets_level(settings):
    configure_logging(settings.model_copy(update={"log_level": "warning"}))
    assert logging.root.level == logging.WARNING


def test_enricher_adds_properties_and_request_id():
    enricher = EnrichmentFilter({"environment": "Test", "version": "abc"})
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert enricher.filter(record) is True
    finally:
        request_id_var.reset(token)

    assert record.environment == "Test"
    assert record.version == "abc"
    assert record.request_id == "req-42"


def test_enricher_does_not_override_explicit_extra():
    enricher = EnrichmentFilter({"environment": "Test"})
    record = _record(environment="Explicit")
    enricher.filter(record)
    assert record.environment == "Explicit"


def test_json_formatter_includes_enriched_fields():
    record = _record(
        "served", environment="Production", azure_datacenter="uksouth",
        request_id="req-1", status_code=200,
    )
    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "served"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "website.test"
    assert payload["environment"] == "Production"
    assert payload["azure_datacenter"] == "uksouth"
    assert payload["request_id"] == "req-1"
    assert payload["status_code"] == 200
    assert "timestamp" in payload


def test_json_formatter_omits_missing_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "request_id" not in payload
    assert "exception" not in payload
