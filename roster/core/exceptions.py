"""
Infrastructure exceptions for Roster.

Purpose
-------
Define the structured exception hierarchy for infrastructure-level concerns:
storage backend failures and configuration errors. These require technical
attention rather than different caller input.

Design Notes
------------
- All infrastructure exceptions inherit from `RosterInfrastructureException`.
- Each exception carries `message`, `details`, `severity`, `is_retryable`
  and a stable `error_code`, mirroring the domain hierarchy in
  `roster.modules.shared.exceptions`.
- Nothing in Roster retries automatically; `is_retryable` is a hint for the
  calling layer.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from roster.modules.shared.exceptions import ErrorSeverity


class RosterInfrastructureException(Exception):
    """
    Base exception for all Roster infrastructure-level errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error
        severity: Error severity level for logging handlers
        is_retryable: Whether the calling layer may retry
        error_code: Optional code for programmatic handling
    """

    DEFAULT_SEVERITY: ErrorSeverity = ErrorSeverity.ERROR
    DEFAULT_RETRYABLE: bool = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        is_retryable: Optional[bool] = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.message: str = message
        self.details: Dict[str, Any] = details or {}
        self.severity: ErrorSeverity = severity or self.DEFAULT_SEVERITY
        self.is_retryable: bool = (
            is_retryable if is_retryable is not None else self.DEFAULT_RETRYABLE
        )
        self.error_code: str = error_code or self.__class__.__name__
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "severity": self.severity.value,
            "is_retryable": self.is_retryable,
        }

    def __str__(self) -> str:
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"


class ConfigurationError(RosterInfrastructureException):
    """
    Raised when a configuration key is invalid or missing.

    Args:
        config_key: The configuration key that has issues
        message: Description of the configuration problem
    """

    DEFAULT_SEVERITY = ErrorSeverity.CRITICAL

    def __init__(self, config_key: str, message: str) -> None:
        self.config_key = config_key
        super().__init__(
            f"Configuration error for {config_key}: {message}",
            details={
                "config_key": config_key,
                "message": message,
            },
            error_code="CONFIG_ERROR",
        )


class RepositoryError(RosterInfrastructureException):
    """
    Raised when a storage backend fails to complete an operation.

    The operation is rolled back before this is raised, so no partial write is
    observable. Retrying is left to the caller.

    Args:
        operation: Repository operation that failed (e.g., "save")
        reason: Explanation of the failure
        original_error: The underlying backend exception, if any
    """

    DEFAULT_SEVERITY = ErrorSeverity.ERROR

    def __init__(
        self,
        operation: str,
        reason: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.operation = operation
        self.reason = reason
        self.original_error = original_error
        super().__init__(
            f"Repository error during '{operation}': {reason}",
            details={
                "operation": operation,
                "reason": reason,
                "error_type": type(original_error).__name__ if original_error else None,
            },
            error_code="REPOSITORY_ERROR",
        )
