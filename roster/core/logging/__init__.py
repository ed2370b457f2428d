"""
Roster logging.

Call ``setup_logging()`` once at process start; library code only ever calls
``get_logger(__name__)`` and binds operation context with ``LogContext``.
Records carry correlation_id, component, operation and character, and render
as JSON in production or as plain/colored text in development.
"""

from roster.core.logging.logger import (
    CONTEXT_FIELDS,
    ContextFilter,
    JSONFormatter,
    LogContext,
    LoggerConfig,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Lifecycle
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    # Context
    "LogContext",
    "CONTEXT_FIELDS",
    "get_log_context",
    "set_log_context",
    "clear_log_context",
    # Building blocks
    "ContextFilter",
    "JSONFormatter",
    "LoggerConfig",
]
