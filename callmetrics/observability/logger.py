# callmetrics/observability/logger.py

# structured JSON logger
import logging
import os
import sys

from opentelemetry import trace
from pythonjsonlogger.json import JsonFormatter

LIBRARY_LOGGER = "callmetrics"


class TraceIdFilter(logging.Filter):
    """Inject trace_id into the record when a span is active."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            ctx = trace.get_current_span().get_span_context()
            record.trace_id = f"{ctx.trace_id:032x}" if ctx.trace_id else None
        return True


def _build_formatter() -> logging.Formatter:
    return JsonFormatter(
        fmt=(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(pathname)s %(lineno)d %(trace_id)s"
        ),
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def _has_handler(lg: logging.Logger, handler_type: type) -> bool:
    # FileHandler subclasses StreamHandler, so compare exact types
    return any(type(h) is handler_type for h in lg.handlers)


def configure_logging(config_module) -> logging.Logger:
    """Attach JSON handlers to the library logger.

    - JSON console handler on stdout.
    - JSON file handler under LOGS_PATH when the setting is provided.
    - trace_id injected from the current OpenTelemetry span.
    - DEBUG=True forces the DEBUG level regardless of LOG_LEVEL.
    Safe to call more than once.
    """
    lg = logging.getLogger(LIBRARY_LOGGER)
    # DEBUG wins over LOG_LEVEL
    level = "DEBUG" if getattr(config_module, "DEBUG", False) else getattr(config_module, "LOG_LEVEL", "INFO")
    lg.setLevel(level)
    lg.propagate = False

    formatter = _build_formatter()
    trace_filter = TraceIdFilter()

    if not _has_handler(lg, logging.StreamHandler):
        console = logging.StreamHandler(stream=sys.stdout)
        console.setFormatter(formatter)
        console.addFilter(trace_filter)
        lg.addHandler(console)

    logs_path = getattr(config_module, "LOGS_PATH", None)
    if logs_path and not _has_handler(lg, logging.FileHandler):
        os.makedirs(logs_path, exist_ok=True)
        handler = logging.FileHandler(os.path.join(logs_path, "callmetrics.log"), encoding="utf-8")
        handler.setFormatter(formatter)
        handler.addFilter(trace_filter)
        lg.addHandler(handler)

    lg.debug("logging configured")
    return lg
