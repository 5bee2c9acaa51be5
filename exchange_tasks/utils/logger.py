"""structlog setup for the tasks: colored console plus a JSON lines file.

Connection secrets never reach a log record; any event field named like a
secret is masked before rendering.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from exchange_tasks.config import LOG_DIR, LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# Token acquisition and EWS SOAP traffic log every request at INFO/DEBUG.
_NOISY_LOGGERS = (
    "azure",
    "azure.identity",
    "azure.core",
    "msal",
    "httpx",
    "httpcore",
    "urllib3",
    "msgraph",
    "kiota_http",
    "exchangelib",
)

_SECRET_FIELDS = frozenset({"password", "client_secret", "access_token", "authorization"})

_configured = False


def _level_from_env() -> int:
    if VERBOSE_LOGGING:
        return logging.DEBUG
    if LOG_LEVEL.isdigit():
        return int(LOG_LEVEL)
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)


def mask_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: replace values of secret-named fields."""
    for key in _SECRET_FIELDS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = "***"
    return event_dict


def _formatter(renderer: Any) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
    )


def _handlers(level: int) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_formatter(structlog.dev.ConsoleRenderer(colors=True)))

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    jsonl = logging.FileHandler(LOG_FILE, encoding="utf-8")
    jsonl.setFormatter(_formatter(structlog.processors.JSONRenderer()))

    for handler in (console, jsonl):
        handler.setLevel(level)
    return [console, jsonl]


def _configure_logging() -> None:
    global _configured
    if _configured:
        return

    level = _level_from_env()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in _handlers(level):
        root.addHandler(handler)
    logging.captureWarnings(True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            mask_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "exchange_tasks", **bindings: Any) -> BoundLogger:
    """Return a structured logger; logging is configured on first use."""
    _configure_logging()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


def bind_context(**context: Any) -> None:
    """Attach fields to every log entry of the current context (e.g. the CLI command)."""
    structlog.contextvars.bind_contextvars(**context)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_task_step(task_name: str, step: str, data: Any = None) -> None:
    """One milestone of a task run. The payload is only emitted at DEBUG when verbose."""
    logger = get_logger().bind(task=task_name, kind="task_step")
    if data is None:
        logger.info(step)
    elif VERBOSE_LOGGING:
        logger.debug(step, data=data)
    else:
        logger.info(step, data=data)
