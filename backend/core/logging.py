"""Structured Logging for the Netflix Shows API

structlog runs on top of stdlib logging so uvicorn and SQLAlchemy records
share one pipeline:

- console renderer while developing, JSON lines when LOG_JSON is set
- correlation id and request fields bound per request (see core.middleware)
- service name and version stamped on every event
- values under credential-like keys replaced before rendering
"""
import logging
import sys
from uuid import uuid4

import structlog
from structlog.types import EventDict, Processor

SERVICE_NAME = "netflix-shows-api"
SERVICE_VERSION = "0.1.0"

LOGGER_PREFIX = "netflix_shows"

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset({"password", "token", "secret", "authorization", "cookie"})
MAX_REDACT_DEPTH = 5

# stdlib loggers -> level when SQL logging is off
THIRD_PARTY_LEVELS = {
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "aiosqlite": logging.WARNING,
}


def _redact(value, depth: int = 0):
    if depth > MAX_REDACT_DEPTH:
        return value
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SENSITIVE_KEYS else _redact(item, depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_redact(item, depth + 1) for item in value]
    return value


def censor_sensitive_keys(logger, method_name: str, event_dict: EventDict) -> EventDict:
    return _redact(event_dict)


def add_service_info(logger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", SERVICE_VERSION)
    return event_dict


def shared_processors() -> list[Processor]:
    """Processors applied to structlog and foreign (stdlib) records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_service_info,
        censor_sensitive_keys,
    ]


def _renderer(json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(settings=None, *, level: str | None = None, json_logs: bool | None = None,
                      log_sql: bool | None = None) -> None:
    """Route structlog and stdlib logging through a single stdout handler.

    Values come from ``settings`` (LOG_LEVEL, LOG_JSON, LOG_SQL); explicit
    keyword arguments take precedence.
    """
    if settings is not None:
        level = level or settings.LOG_LEVEL
        json_logs = settings.LOG_JSON if json_logs is None else json_logs
        log_sql = settings.LOG_SQL if log_sql is None else log_sql

    log_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors = shared_processors()

    structlog.configure(
        processors=[
            *processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(bool(json_logs)),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # uvicorn installs its own handlers; let records propagate to root instead
    for name in ("uvicorn", "uvicorn.error"):
        logging.getLogger(name).handlers = []

    for name, third_party_level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(third_party_level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if log_sql else logging.WARNING)


def get_logger(name: str = LOGGER_PREFIX) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def generate_correlation_id() -> str:
    """Short random id used when a request carries no X-Correlation-ID."""
    return uuid4().hex[:8]


def bind_context(**kwargs) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LoggerRegistry:
    """One named logger per layer (``netflix_shows.api``, ``netflix_shows.db``...)."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, layer: str) -> structlog.stdlib.BoundLogger:
        if layer not in cls._loggers:
            cls._loggers[layer] = get_logger(f"{LOGGER_PREFIX}.{layer}")
        return cls._loggers[layer]


def api_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("api")


def db_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("db")


def validation_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("validation")
