"""Structured logging with request-id propagation and payload truncation."""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

from docugen.config import Settings, get_settings

SERVICE_NAME = "docugen"

# Longest string value written for any log field; model replies can be huge
MAX_FIELD_CHARS = 500

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Get current request ID from context."""
    return request_id_ctx.get()


def set_request_id(request_id: str | None) -> None:
    """Set request ID in context."""
    request_id_ctx.set(request_id)


def add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor adding the service name and request_id."""
    event_dict.setdefault("service", SERVICE_NAME)
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def truncate_long_values(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor clipping oversized string fields (HTML, model output)."""
    for key, value in event_dict.items():
        if key == "event":
            continue
        if isinstance(value, str) and len(value) > MAX_FIELD_CHARS:
            event_dict[key] = f"{value[:MAX_FIELD_CHARS]}... ({len(value)} chars)"
    return event_dict


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog on top of the standard library logging tree."""
    settings = settings or get_settings()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_service_context,
        truncate_long_values,
    ]

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    # Suppress noisy loggers
    for name in ("httpx", "httpcore", "google_genai", "uvicorn.access"):
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_session(session_id: str) -> None:
    """Attach a report session id to every log line emitted in this context."""
    structlog.contextvars.bind_contextvars(session_id=session_id)


def clear_session() -> None:
    """Drop the report session id from the logging context."""
    structlog.contextvars.unbind_contextvars("session_id")


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)
