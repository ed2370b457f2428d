"""
Domain exceptions package for Roster.

Purpose
-------
Centralized domain exception definitions and error message templates.

Exports
-------
- All domain exception classes (re-exported from modules.shared.exceptions)
- EXCEPTION_TEMPLATES: Registry mapping exception types to user-facing templates
- format_exception: Render any exception as {code, title, description, ...}
"""

# Re-exported; still defined in roster/modules/shared/exceptions.py
from roster.modules.shared.exceptions import (
    AlreadyExistsError,
    BusinessRuleViolationError,
    CharacterAlreadyExistsError,
    CharacterNotFoundError,
    ErrorSeverity,
    InvalidClassError,
    InvalidLevelError,
    InvalidNameError,
    InvalidOperationError,
    InvalidSpecificationError,
    MaxLevelReachedError,
    NotFoundError,
    RosterDomainException,
    ValidationError,
    get_error_severity,
    is_transient_error,
    should_alert,
)

from .registry import (
    EXCEPTION_TEMPLATES,
    ExceptionTemplate,
    format_exception,
    get_exception_template,
)

__all__ = [
    # Exception classes
    "RosterDomainException",
    "ValidationError",
    "InvalidNameError",
    "InvalidLevelError",
    "InvalidClassError",
    "NotFoundError",
    "CharacterNotFoundError",
    "AlreadyExistsError",
    "CharacterAlreadyExistsError",
    "InvalidOperationError",
    "MaxLevelReachedError",
    "BusinessRuleViolationError",
    "InvalidSpecificationError",
    "ErrorSeverity",
    # Utilities
    "is_transient_error",
    "get_error_severity",
    "should_alert",
    # Registry
    "EXCEPTION_TEMPLATES",
    "ExceptionTemplate",
    "get_exception_template",
    "format_exception",
]
