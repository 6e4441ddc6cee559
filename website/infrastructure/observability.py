"""Structured Logging — enrichers, sinks and JSON formatting for the site.

Invariants:
    - All logs include timestamp, level, logger name, message and the enricher
      properties (environment, azure_datacenter, azure_environment, version)
    - request_id surfaced when the record was logged while serving a request
    - Console sink always installed; telemetry and Papertrail sinks only when
      their settings are present
    - configure_logging is idempotent: re-running replaces the handlers it
      installed previously instead of stacking them

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - Enrichment as a logging.Filter on each handler so every sink sees the
      same properties
    - Request id carried in a ContextVar: set by the security headers middleware,
      read here, no coupling to Starlette
    - Application Insights via the OpenTelemetry logging handler and the Azure
      Monitor exporter; Papertrail via the stdlib syslog handler
"""

import json
import logging
import logging.handlers
from contextvars import ContextVar
from datetime import datetime, timezone

from azure.monitor.opentelemetry.exporter import AzureMonitorLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource

from website.config import Settings
from website.core.errors import ConfigurationError

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

ENRICHED_FIELDS = (
    "environment", "azure_datacenter", "azure_environment", "version",
    "request_id",
)
EXTRA_FIELDS = ("path", "status_code", "error_code", "duration_ms")
LOG_FORMATS = ("json", "text")

_installed_handlers: list[logging.Handler] = []


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ENRICHED_FIELDS + EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class EnrichmentFilter(logging.Filter):
    """Attach fixed host properties and the current request id to records."""

    def __init__(self, properties: dict[str, str]):
        super().__init__()
        self.properties = dict(properties)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.properties.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


def enricher_properties(settings: Settings) -> dict[str, str]:
    return {
        "environment": settings.environment,
        "azure_datacenter": settings.azure_datacenter,
        "azure_environment": settings.azure_environment,
        "version": settings.git_commit,
    }


def validate_log_format(fmt: str) -> str:
    if fmt not in LOG_FORMATS:
        raise ConfigurationError(
            f"expected one of {', '.join(LOG_FORMATS)}, got '{fmt}'", "log_format",
        )
    return fmt


def build_console_handler(fmt: str) -> logging.Handler:
    validate_log_format(fmt)
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
        ))
    return handler


def build_telemetry_handler(connection_string: str, settings: Settings) -> logging.Handler:
    """Application Insights sink — log records exported as OpenTelemetry logs."""
    provider = LoggerProvider(resource=Resource.create({
        "service.name": "website",
        "service.instance.id": settings.website_instance_id,
        "service.version": settings.git_commit,
        "deployment.environment": settings.environment,
    }))
    provider.add_log_record_processor(BatchLogRecordProcessor(
        AzureMonitorLogExporter(connection_string=connection_string),
    ))
    return LoggingHandler(level=logging.NOTSET, logger_provider=provider)


def build_papertrail_handler(hostname: str, port: int) -> logging.Handler:
    """Remote collector sink — RFC 3164 syslog over UDP."""
    handler = logging.handlers.SysLogHandler(address=(hostname, port))
    handler.setFormatter(logging.Formatter(
        "website: %(levelname)s %(name)s [%(request_id)s] %(message)s",
    ))
    return handler


def build_handlers(settings: Settings) -> list[logging.Handler]:
    """Compose the sinks enabled by the current settings."""
    handlers = [build_console_handler(settings.log_format)]
    if settings.applicationinsights_connection_string:
        handlers.append(build_telemetry_handler(
            settings.applicationinsights_connection_string, settings,
        ))
    if settings.papertrail_hostname:
        handlers.append(build_papertrail_handler(
            settings.papertrail_hostname, settings.papertrail_port,
        ))
    return handlers


def configure_logging(settings: Settings) -> list[logging.Handler]:
    """Configure the root logger for the application. Returns the sinks installed."""
    handlers = build_handlers(settings)
    enricher = EnrichmentFilter(enricher_properties(settings))
    for handler in handlers:
        handler.addFilter(enricher)

    shutdown_logging()
    for handler in handlers:
        logging.root.addHandler(handler)
        _installed_handlers.append(handler)
    logging.root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return handlers


def shutdown_logging() -> None:
    """Flush and detach the handlers installed by configure_logging."""
    while _installed_handlers:
        handler = _installed_handlers.pop()
        logging.root.removeHandler(handler)
        handler.flush()
        handler.close()
