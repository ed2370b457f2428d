"""
Static configuration management for Roster.

Purpose
-------
Provides centralized static configuration loaded from environment variables
with sensible defaults, type validation, and bounds checking.

Responsibilities
----------------
- Load configuration from environment variables with .env support
- Provide type-safe access to all static configuration values
- Validate settings on startup
- Track which values came from the environment versus defaults

Non-Responsibilities
--------------------
- Gameplay constants (see roster.modules.shared.constants)
- Runtime configuration changes (except explicit reload)
- Secrets management (use environment variables)

Architecture Notes
------------------
- Singleton pattern via class methods (no instantiation)
- Values are loaded on module import via Config.load()
- Config.validate() raises ConfigurationError for values that cannot be
  recovered by falling back to a default

Environment Variables
---------------------
All optional (with defaults):
- ENVIRONMENT: Environment type (default: development)
- DEBUG: Debug mode flag (default: False)
- LOG_LEVEL: Logging level (default: INFO)
- LOG_JSON: Force JSON console logs (default: production only)
- LOG_COLORS: Colored console logs on a TTY (default: True)
- LOGS_DIR: Directory for the rotating JSON log file (default: unset, no file)
- DATABASE_URL: SQLAlchemy URL for the SQL repository (default: in-memory SQLite)
- DATABASE_ECHO: Echo SQL statements (default: False)
- ROSTER_SEED_DEFAULTS: Seed the demo roster into new repositories (default: False)
"""

import logging
import os
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Deployment environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"

    @classmethod
    def from_string(cls, value: str) -> "Environment":
        """
        Parse environment string safely with fallback.

        Example
        -------
        >>> Environment.from_string("production") == Environment.PRODUCTION
        True
        >>> Environment.from_string("invalid") == Environment.DEVELOPMENT
        True
        """
        try:
            return cls(value.lower())
        except ValueError:
            # Structured logger is not configured yet at this point
            logging.warning(f"Unknown environment '{value}', defaulting to development")
            return cls.DEVELOPMENT


class _ConfigLoadMetrics:
    """Tracks which configuration values came from the environment versus defaults."""

    def __init__(self):
        self.env_vars_loaded: Dict[str, bool] = {}
        self.validation_errors: Dict[str, str] = {}
        self.defaults_used: Dict[str, Any] = {}
        self.last_reload: Optional[str] = None

    def record_env_load(self, key: str, from_env: bool, default: Any):
        self.env_vars_loaded[key] = from_env
        if not from_env:
            self.defaults_used[key] = default

    def record_validation_error(self, key: str, error: str):
        self.validation_errors[key] = error

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_configs": len(self.env_vars_loaded),
            "from_environment": sum(1 for v in self.env_vars_loaded.values() if v),
            "from_defaults": sum(1 for v in self.env_vars_loaded.values() if not v),
            "validation_errors": len(self.validation_errors),
            "defaults_used": list(self.defaults_used.keys()),
            "last_reload": self.last_reload,
        }


class Config:
    """
    Centralized static configuration for Roster.

    Usage
    -----
    >>> if Config.is_production():
    ...     logger.info("Running in production mode")
    >>> logger.info("Config loaded", extra=Config.summary())
    """

    _metrics: Optional[_ConfigLoadMetrics] = None

    # =========================================================================
    # Environment
    # =========================================================================

    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # =========================================================================
    # Logging
    # =========================================================================

    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None
    LOG_COLORS: bool = True
    LOGS_DIR: Optional[Path] = None

    # =========================================================================
    # Storage
    # =========================================================================

    DATABASE_URL: str = "sqlite:///:memory:"
    DATABASE_ECHO: bool = False
    ROSTER_SEED_DEFAULTS: bool = False

    # =========================================================================
    # Helper Methods
    # =========================================================================

    @classmethod
    def _init_metrics(cls) -> None:
        if cls._metrics is None:
            cls._metrics = _ConfigLoadMetrics()

    @classmethod
    def _record_error(cls, key: str, error: str) -> None:
        logging.warning(error)
        if cls._metrics:
            cls._metrics.record_validation_error(key, error)

    @classmethod
    def _parse_bool(cls, key: str, raw_value: str) -> Optional[bool]:
        normalized = raw_value.lower().strip()
        if normalized in {"true", "yes", "1", "on"}:
            return True
        if normalized in {"false", "no", "0", "off"}:
            return False
        return None

    @classmethod
    def _safe_bool(cls, key: str, default: bool) -> bool:
        """
        Safely parse boolean from environment.

        Recognizes: true/false, yes/no, 1/0, on/off (case-insensitive).
        """
        cls._init_metrics()

        raw_value = os.getenv(key)
        if raw_value is None:
            cls._metrics.record_env_load(key, False, default)
            return default

        value = cls._parse_bool(key, raw_value)
        if value is None:
            cls._record_error(
                key, f"{key}='{raw_value}' is not a valid boolean, using default {default}"
            )
            return default

        cls._metrics.record_env_load(key, True, default)
        return value

    @classmethod
    def _safe_optional_bool(cls, key: str) -> Optional[bool]:
        """Parse an optional boolean; unset or malformed values yield None."""
        cls._init_metrics()

        raw_value = os.getenv(key)
        if raw_value is None:
            cls._metrics.record_env_load(key, False, None)
            return None

        value = cls._parse_bool(key, raw_value)
        if value is None:
            cls._record_error(key, f"{key}='{raw_value}' is not a valid boolean, ignoring")
            return None

        cls._metrics.record_env_load(key, True, None)
        return value

    @classmethod
    def _safe_str(cls, key: str, default: str) -> str:
        cls._init_metrics()
        value = os.getenv(key, default)
        cls._metrics.record_env_load(key, key in os.environ, default)
        return value

    # =========================================================================
    # Configuration Loading
    # =========================================================================

    @classmethod
    def load(cls) -> None:
        """
        Load all configuration from environment variables.

        Called automatically on module import; call again to pick up
        environment changes (tests use this after monkeypatching).
        """
        cls._metrics = _ConfigLoadMetrics()

        cls.ENVIRONMENT = Environment.from_string(
            cls._safe_str("ENVIRONMENT", "development")
        ).value
        cls.DEBUG = cls._safe_bool("DEBUG", False)

        cls.LOG_LEVEL = cls._safe_str("LOG_LEVEL", "INFO").upper()
        cls.LOG_JSON = cls._safe_optional_bool("LOG_JSON")
        cls.LOG_COLORS = cls._safe_bool("LOG_COLORS", True)
        logs_dir = cls._safe_str("LOGS_DIR", "")
        cls.LOGS_DIR = Path(logs_dir) if logs_dir else None

        cls.DATABASE_URL = cls._safe_str("DATABASE_URL", "sqlite:///:memory:")
        cls.DATABASE_ECHO = cls._safe_bool("DATABASE_ECHO", False)
        cls.ROSTER_SEED_DEFAULTS = cls._safe_bool("ROSTER_SEED_DEFAULTS", False)

        cls._metrics.last_reload = datetime.now(timezone.utc).isoformat()

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values that cannot fall back to a default.

        Raises
        ------
        ConfigurationError
            If a value is unusable in the current environment.
        """
        from roster.core.exceptions import ConfigurationError

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if cls.LOG_LEVEL not in valid_log_levels:
            raise ConfigurationError(
                "LOG_LEVEL",
                f"'{cls.LOG_LEVEL}' is not one of {', '.join(valid_log_levels)}",
            )

        if not cls.DATABASE_URL:
            raise ConfigurationError("DATABASE_URL", "must not be empty")

        if cls.is_production() and cls.DEBUG:
            logging.getLogger(__name__).warning("DEBUG mode enabled in production!")

        if cls._metrics and cls._metrics.validation_errors:
            logging.getLogger(__name__).warning(
                "Configuration warnings",
                extra={"validation_errors": cls._metrics.validation_errors},
            )

    @classmethod
    def summary(cls) -> Dict[str, Any]:
        """Loggable snapshot of the effective configuration."""
        return {
            "environment": cls.ENVIRONMENT,
            "debug": cls.DEBUG,
            "log_level": cls.LOG_LEVEL,
            "logs_dir": str(cls.LOGS_DIR) if cls.LOGS_DIR else None,
            "database_url": cls.DATABASE_URL.split("@")[-1],
            "seed_defaults": cls.ROSTER_SEED_DEFAULTS,
            **(cls._metrics.get_summary() if cls._metrics else {}),
        }

    # =========================================================================
    # Environment Checks
    # =========================================================================

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == Environment.PRODUCTION.value

    @classmethod
    def is_development(cls) -> bool:
        return cls.ENVIRONMENT == Environment.DEVELOPMENT.value

    @classmethod
    def is_testing(cls) -> bool:
        return cls.ENVIRONMENT == Environment.TESTING.value


Config.load()
