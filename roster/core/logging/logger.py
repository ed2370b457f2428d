"""
Roster Logging Subsystem

Purpose
-------
Provide the single logging setup for Roster:

- Structured JSON logs for aggregation and analysis.
- LogContext-based propagation of operation context via ContextVars.
- Correlation IDs for end-to-end traceability of a service call.
- Component-aware metadata derived from logger names and explicit context.
- Hybrid output:
  - Console handler (JSON in production, colored human text in dev).
  - Optional daily rotating JSON file when LOGS_DIR is configured.

Responsibilities
----------------
- Initialize and configure the root logger (explicitly, never on import).
- Enrich all log records with contextual fields:
  - correlation_id, component, operation, character
- Provide simple helper APIs:
  - get_logger()
  - LogContext (sync + async context manager)
  - set_log_context() / clear_log_context()

Design Decisions
----------------
- JSONFormatter is the canonical representation.
- ContextFilter uses ContextVars so the context follows the async adapter.
- Extra fields passed via `logger.info("msg", extra={...})` are merged into JSON.

Dependencies
------------
- roster.core.config.Config
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import TimedRotatingFileHandler
from typing import Any, Dict, Optional

from roster.core.config import Config


# ============================================================================
# Operation Context (ContextVars)
# ============================================================================

_request_context: ContextVar[Dict[str, Any]] = ContextVar(
    "request_context",
    default={},
)


# ============================================================================
# Config / Environment
# ============================================================================


@dataclass(frozen=True)
class LoggerConfig:
    """Configuration for the logging subsystem."""

    CONSOLE_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    DAILY_BASENAME: str = "roster_daily.json.log"
    DAILY_BACKUP_COUNT: int = 1

    @property
    def is_production(self) -> bool:
        return Config.is_production()

    @property
    def log_level(self) -> int:
        return getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)

    @property
    def use_json(self) -> bool:
        if Config.LOG_JSON is None:
            return self.is_production
        return Config.LOG_JSON

    @property
    def use_colors(self) -> bool:
        if self.is_production or self.use_json:
            return False
        return Config.LOG_COLORS and sys.stdout.isatty()


LOGGER_CONFIG = LoggerConfig()


# ============================================================================
# Filters & Formatters
# ============================================================================


# Fields a LogContext binds; ContextFilter copies them onto every record
CONTEXT_FIELDS = ("correlation_id", "component", "operation", "character")

# Attributes every LogRecord already carries, so they are never treated as extra
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("roster", logging.INFO, __file__, 0, "", (), None))
) | {"message", "asctime", "taskName"}


class ContextFilter(logging.Filter):
    """Copy the bound LogContext onto each record; unbound fields read "N/A"."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context: Dict[str, Any] = _request_context.get({})

        for field in CONTEXT_FIELDS:
            setattr(record, field, context.get(field) or "N/A")

        if record.component == "N/A":
            record.component = record.name.split(".", 1)[0]

        return True


class ColoredFormatter(logging.Formatter):
    """Console format with the level name tinted by severity."""

    RESET = "\033[0m"
    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[1;91m",
    }

    def formatMessage(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return line
        return line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class JSONFormatter(logging.Formatter):
    """One JSON object per record: fixed fields, bound context, then ``extra``."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)

        payload: Dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if getattr(record, field, "N/A") not in (None, "N/A")
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
            and key not in CONTEXT_FIELDS
            and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


# ============================================================================
# Global Setup
# ============================================================================


def _build_console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOGGER_CONFIG.log_level)

    if LOGGER_CONFIG.use_json:
        handler.setFormatter(JSONFormatter())
    elif LOGGER_CONFIG.use_colors:
        handler.setFormatter(
            ColoredFormatter(
                fmt=LOGGER_CONFIG.CONSOLE_FORMAT,
                datefmt=LOGGER_CONFIG.DATE_FORMAT,
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt=LOGGER_CONFIG.CONSOLE_FORMAT,
                datefmt=LOGGER_CONFIG.DATE_FORMAT,
            )
        )

    return handler


def _build_daily_file_handler() -> Optional[logging.Handler]:
    if Config.LOGS_DIR is None:
        return None

    logs_dir = Config.LOGS_DIR.resolve()
    logs_dir.mkdir(parents=True, exist_ok=True)

    handler = TimedRotatingFileHandler(
        filename=str(logs_dir / LOGGER_CONFIG.DAILY_BASENAME),
        when="midnight",
        interval=1,
        backupCount=LOGGER_CONFIG.DAILY_BACKUP_COUNT,
        encoding="utf-8",
        utc=True,
    )
    handler.setLevel(LOGGER_CONFIG.log_level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging() -> None:
    """Configure the root logger once; later calls are no-ops."""
    root = logging.getLogger()

    if getattr(root, "_roster_logging_initialized", False):
        return

    root.setLevel(LOGGER_CONFIG.log_level)

    context_filter = ContextFilter()
    console = _build_console_handler()
    console.addFilter(context_filter)
    root.addHandler(console)

    file_handler = _build_daily_file_handler()
    if file_handler is not None:
        file_handler.addFilter(context_filter)
        root.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if Config.DATABASE_ECHO else logging.WARNING
    )

    setattr(root, "_roster_logging_initialized", True)
    setattr(root, "_roster_handlers", [h for h in (console, file_handler) if h])

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": Config.ENVIRONMENT,
            "log_level": logging.getLevelName(LOGGER_CONFIG.log_level),
            "json": LOGGER_CONFIG.use_json,
            "colors": LOGGER_CONFIG.use_colors,
            "logs_dir": str(Config.LOGS_DIR) if Config.LOGS_DIR else None,
        },
    )


def shutdown_logging() -> None:
    """Flush, close and detach the handlers installed by setup_logging()."""
    root = logging.getLogger()

    if not getattr(root, "_roster_logging_initialized", False):
        return

    for handler in getattr(root, "_roster_handlers", []):
        try:
            handler.flush()
            handler.close()
        finally:
            root.removeHandler(handler)

    setattr(root, "_roster_handlers", [])
    setattr(root, "_roster_logging_initialized", False)


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Bind operation context to every record logged inside the block.

    Usage
    -----
    >>> with LogContext(component="character_service", operation="level_up"):
    ...     logger.info("Leveling up")
    """

    def __init__(
        self,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        character: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        inherited = _request_context.get({})

        self.context: Dict[str, Any] = {
            **inherited,
            "component": component or inherited.get("component"),
            "operation": operation or inherited.get("operation", "N/A"),
            "character": character or inherited.get("character", "N/A"),
            "correlation_id": (
                correlation_id
                or inherited.get("correlation_id")
                or self._generate_correlation_id()
            ),
            **extra,
        }

        self._token: Optional[Token[Dict[str, Any]]] = None

    @staticmethod
    def _generate_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    def __enter__(self) -> "LogContext":
        self._token = _request_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _request_context.reset(self._token)

    async def __aenter__(self) -> "LogContext":
        return self.__enter__()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


def get_log_context() -> Dict[str, Any]:
    return dict(_request_context.get({}))


def set_log_context(
    component: Optional[str] = None,
    operation: Optional[str] = None,
    character: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra: Any,
) -> None:
    current = _request_context.get({}).copy()

    if component is not None:
        current["component"] = component
    if operation is not None:
        current["operation"] = operation
    if character is not None:
        current["character"] = character
    if correlation_id:
        current["correlation_id"] = correlation_id

    current.update(extra)
    _request_context.set(current)


def clear_log_context() -> None:
    _request_context.set({})
