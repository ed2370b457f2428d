"""
Domain exceptions for Roster.

Purpose
-------
Define the structured, domain-specific exception hierarchy for the character
roster. These exceptions are raised by value objects, the Character aggregate,
repositories and the CharacterService for validation failures, missing or
duplicate identities, and business rule violations. Presentation layers
translate them into user-facing messages through
`roster.domain.exceptions.registry`.

Design Notes
------------
- All domain exceptions inherit from `RosterDomainException`.
- Each exception carries:
  - `message`: human-readable description
  - `details`: additional structured context (dict-like)
  - `severity`: `ErrorSeverity` value for logging/alerting
  - `is_retryable`: whether the operation can be retried
  - `error_code`: short, stable identifier for programmatic use
- None of the domain errors is retryable: retrying the same input yields the
  same failure.
- Helper functions (`is_transient_error`, `get_error_severity`, `should_alert`)
  centralize common exception handling patterns.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """Error severity levels for logging and alerting."""

    DEBUG = "debug"  # Expected, not concerning
    INFO = "info"  # Normal operation (e.g., validation failures)
    WARNING = "warning"  # Concerning but handled
    ERROR = "error"  # Unexpected errors requiring attention
    CRITICAL = "critical"  # System-level failures requiring immediate action


class RosterDomainException(Exception):
    """
    Base exception for all Roster domain-level errors.

    Args:
        message: Human-readable error message
        details: Additional structured data about the error (dict-like)
        severity: Error severity level for logging handlers
        is_retryable: Whether the operation can be retried
        error_code: Optional code for programmatic handling

    Example:
        >>> raise RosterDomainException(
        ...     "Level up failed",
        ...     {"reason": "already at maximum level"}
        ... )
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
        """String representation for logging."""
        details_str = f" | Details: {self.details}" if self.details else ""
        return f"[{self.error_code}] {self.message}{details_str}"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"severity={self.severity.value!r}, "
            f"is_retryable={self.is_retryable!r}"
            ")"
        )


# ============================================================================
# VALIDATION
# ============================================================================


class ValidationError(RosterDomainException):
    """
    Raised when input fails domain validation.

    Represents malformed names, out-of-range levels, unknown classes and other
    inputs rejected at construction time. Always raised synchronously.

    Args:
        field: Name of the field that failed validation
        message: Explanation of why validation failed
        value: The rejected value (kept in details for logging)
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(
        self,
        field: str,
        message: str,
        value: Any = None,
        error_code: Optional[str] = None,
    ) -> None:
        self.field = field
        self.validation_message = message
        self.value = value
        super().__init__(
            f"Validation error for {field}: {message}",
            details={
                "field": field,
                "validation_message": message,
                "value": value,
            },
            error_code=error_code or f"VALIDATION_{field.upper()}",
        )


class InvalidNameError(ValidationError):
    """Raised when a character name is empty, too short, or not a string."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__("name", message, value=value, error_code="INVALID_NAME")


class InvalidLevelError(ValidationError):
    """Raised when a level is not an integer within the allowed range."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__("level", message, value=value, error_code="INVALID_LEVEL")


class InvalidClassError(ValidationError):
    """Raised when a class name is not one of the known character classes."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__("class", message, value=value, error_code="INVALID_CLASS")


# ============================================================================
# LOOKUP
# ============================================================================


class NotFoundError(RosterDomainException):
    """
    Raised when a requested resource cannot be found.

    Args:
        resource_type: Type of resource (e.g., "Character")
        identifier: Optional identifier for the missing resource
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(self, resource_type: str, identifier: Optional[Any] = None) -> None:
        self.resource_type = resource_type
        self.identifier = identifier

        if identifier is not None:
            message = f"{resource_type} '{identifier}' was not found"
        else:
            message = f"{resource_type} not found"

        super().__init__(
            message,
            details={
                "resource_type": resource_type,
                "identifier": identifier,
            },
            error_code=f"{resource_type.upper()}_NOT_FOUND",
        )


class CharacterNotFoundError(NotFoundError):
    """Raised when no character with the given name exists in the repository."""

    def __init__(self, name: str) -> None:
        self.character_name = name
        super().__init__("Character", name)


class AlreadyExistsError(RosterDomainException):
    """
    Raised when creation is attempted for an identity already present.

    Args:
        resource_type: Type of resource (e.g., "Character")
        identifier: The duplicated identity
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(self, resource_type: str, identifier: Any) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(
            f"{resource_type} '{identifier}' already exists",
            details={
                "resource_type": resource_type,
                "identifier": identifier,
            },
            error_code=f"{resource_type.upper()}_ALREADY_EXISTS",
        )


class CharacterAlreadyExistsError(AlreadyExistsError):
    """Raised when a character name is already taken (case-insensitive)."""

    def __init__(self, name: str) -> None:
        self.character_name = name
        super().__init__("Character", name)


# ============================================================================
# RULES
# ============================================================================


class InvalidOperationError(RosterDomainException):
    """
    Raised when an operation is attempted in a state that forbids it.

    Args:
        action: Description of the invalid action
        reason: Explanation of why it's not allowed

    Example:
        >>> raise InvalidOperationError(
        ...     "level_up",
        ...     "Character is already at maximum level"
        ... )
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(
        self,
        action: str,
        reason: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.action = action
        self.reason = reason
        super().__init__(
            f"Invalid operation '{action}': {reason}",
            details={
                "action": action,
                "reason": reason,
                **(details or {}),
            },
            error_code=error_code or f"INVALID_{action.upper()}",
        )


class MaxLevelReachedError(InvalidOperationError):
    """Raised when leveling up a character that is already at the level cap."""

    def __init__(self, max_level: int, name: Optional[str] = None) -> None:
        self.max_level = max_level
        self.character_name = name
        super().__init__(
            "level_up",
            "Character is already at maximum level",
            error_code="MAX_LEVEL_REACHED",
            details={"max_level": max_level, "name": name},
        )


class BusinessRuleViolationError(RosterDomainException):
    """
    Raised when a combination of individually valid inputs breaks a domain rule.

    Distinct from ValidationError: each input passed validation on its own,
    e.g. a character challenging itself, or two characters too far apart in
    level to fight.

    Args:
        rule: Short description of the violated rule
        details: Optional structured context (e.g. the offending gap)
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(self, rule: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.rule = rule
        super().__init__(
            f"Business rule violation: {rule}",
            details={"rule": rule, **(details or {})},
            error_code="BUSINESS_RULE_VIOLATION",
        )


class InvalidSpecificationError(RosterDomainException):
    """
    Raised when a query criterion is missing or cannot be built.

    Args:
        specification_name: Name of the specification (or "search")
        reason: Why it is invalid
    """

    DEFAULT_SEVERITY = ErrorSeverity.INFO
    DEFAULT_RETRYABLE = False

    def __init__(self, specification_name: str, reason: str) -> None:
        self.specification_name = specification_name
        self.reason = reason
        super().__init__(
            f"Invalid specification '{specification_name}': {reason}",
            details={
                "specification": specification_name,
                "reason": reason,
            },
            error_code="INVALID_SPECIFICATION",
        )


# Utility functions for exception handling patterns


def is_transient_error(exc: Exception) -> bool:
    """
    Check if an exception represents a transient error that can be retried.

    Works for both domain and infrastructure exceptions, which share the
    `is_retryable` attribute.
    """
    return bool(getattr(exc, "is_retryable", False))


def get_error_severity(exc: Exception) -> ErrorSeverity:
    """Get the severity level of an exception for logging."""
    severity = getattr(exc, "severity", None)
    if isinstance(severity, ErrorSeverity):
        return severity
    return ErrorSeverity.ERROR  # Default for unknown exceptions


def should_alert(exc: Exception) -> bool:
    """True if severity is ERROR or CRITICAL."""
    return get_error_severity(exc) in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL)
