"""Logging and tracing helpers."""

from exchange_tasks.utils.logger import bind_context, clear_context, get_logger, log_task_step
from exchange_tasks.utils.tracing import get_tracer, init_tracing, shutdown_tracing

__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "log_task_step",
    "get_tracer",
    "init_tracing",
    "shutdown_tracing",
]
