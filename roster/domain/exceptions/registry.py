"""
Exception message template registry for Roster.

Purpose
-------
Single source of truth for exception-to-message mappings. Provides structured
templates for converting domain and infrastructure exceptions into
user-facing messages with a fixed textual code, so any presentation layer
(CLI, HTTP, logs) renders the same failure the same way.

Design Notes
------------
Each template contains:
- title: Short, clear error title
- template: Message template with {placeholder} interpolation over the
  exception's ``details``
- help_text: Optional helpful guidance for the user
- severity: ErrorSeverity level for styling

Lookup walks the exception's MRO, so a subclass without its own template
falls back to its parent's (e.g. a ValidationError subclass).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from roster.core.exceptions import (
    ConfigurationError,
    RepositoryError,
    RosterInfrastructureException,
)
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
)


UNKNOWN_ERROR_CODE = "UNKNOWN_ERROR"


class ExceptionTemplate:
    """Template for formatting exception messages."""

    def __init__(
        self,
        title: str,
        template: str,
        help_text: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        self.title = title
        self.template = template
        self.help_text = help_text
        self.severity = severity

    def format(self, exception: Exception) -> Dict[str, Any]:
        """
        Format exception using template.

        Args:
            exception: Exception instance to format

        Returns:
            Dict with 'title', 'description', 'help_text', 'severity'
        """
        details = {}
        if isinstance(exception, (RosterDomainException, RosterInfrastructureException)):
            details = exception.details.copy()

        try:
            description = self.template.format(**details)
        except (KeyError, ValueError):
            # Fallback to exception message if template interpolation fails
            description = getattr(exception, "message", str(exception))

        return {
            "title": self.title,
            "description": description,
            "help_text": self.help_text,
            "severity": self.severity,
        }


# ============================================================================
# EXCEPTION TEMPLATE REGISTRY
# ============================================================================

EXCEPTION_TEMPLATES: Dict[type, ExceptionTemplate] = {
    # Validation
    ValidationError: ExceptionTemplate(
        title="Invalid Input",
        template="**{field}**: {validation_message}",
        help_text="Please check your input and try again.",
        severity=ErrorSeverity.INFO,
    ),
    InvalidNameError: ExceptionTemplate(
        title="Invalid Name",
        template="{validation_message}",
        help_text="Names must be at least 2 characters long.",
        severity=ErrorSeverity.INFO,
    ),
    InvalidLevelError: ExceptionTemplate(
        title="Invalid Level",
        template="{validation_message}",
        help_text="Levels are whole numbers from 1 to 100.",
        severity=ErrorSeverity.INFO,
    ),
    InvalidClassError: ExceptionTemplate(
        title="Invalid Class",
        template="{validation_message}",
        help_text="Choose one of: Guerreiro, Mago, Arqueiro, Paladino.",
        severity=ErrorSeverity.INFO,
    ),
    # Lookup
    NotFoundError: ExceptionTemplate(
        title="Not Found",
        template="{resource_type} not found.",
        help_text=None,
        severity=ErrorSeverity.INFO,
    ),
    CharacterNotFoundError: ExceptionTemplate(
        title="Character Not Found",
        template="No character named **{identifier}** exists in the roster.",
        help_text="List the roster to see the available characters.",
        severity=ErrorSeverity.INFO,
    ),
    AlreadyExistsError: ExceptionTemplate(
        title="Already Exists",
        template="{resource_type} **{identifier}** already exists.",
        help_text=None,
        severity=ErrorSeverity.INFO,
    ),
    CharacterAlreadyExistsError: ExceptionTemplate(
        title="Name Taken",
        template="A character named **{identifier}** already exists.",
        help_text="Names are case-insensitive; pick a different one.",
        severity=ErrorSeverity.INFO,
    ),
    # Rules
    InvalidOperationError: ExceptionTemplate(
        title="Invalid Operation",
        template="{reason}",
        help_text=None,
        severity=ErrorSeverity.INFO,
    ),
    MaxLevelReachedError: ExceptionTemplate(
        title="Maximum Level Reached",
        template="This character is already at level **{max_level}**.",
        help_text=None,
        severity=ErrorSeverity.INFO,
    ),
    BusinessRuleViolationError: ExceptionTemplate(
        title="Rule Violation",
        template="{rule}",
        help_text="Opponents must be different characters at most 20 levels apart.",
        severity=ErrorSeverity.INFO,
    ),
    InvalidSpecificationError: ExceptionTemplate(
        title="Invalid Search",
        template="The **{specification}** search is invalid: {reason}",
        help_text="Check the search criteria and try again.",
        severity=ErrorSeverity.INFO,
    ),
    # Infrastructure
    ConfigurationError: ExceptionTemplate(
        title="Configuration Error",
        template="A system configuration error occurred. Please contact support.",
        help_text="Error code: CONFIG_ERROR",
        severity=ErrorSeverity.CRITICAL,
    ),
    RepositoryError: ExceptionTemplate(
        title="Storage Error",
        template="The roster could not complete **{operation}**. Please try again in a moment.",
        help_text="If this persists, contact support.",
        severity=ErrorSeverity.ERROR,
    ),
}

_FALLBACK_TEMPLATE = ExceptionTemplate(
    title="Unexpected Error",
    template="Something went wrong. Please try again.",
    help_text=None,
    severity=ErrorSeverity.ERROR,
)


def get_exception_template(exception: Exception) -> Optional[ExceptionTemplate]:
    """
    Get the most specific template for an exception type.

    Args:
        exception: Exception instance

    Returns:
        ExceptionTemplate if found for the type or one of its bases, None otherwise
    """
    for exception_type in type(exception).__mro__:
        template = EXCEPTION_TEMPLATES.get(exception_type)
        if template is not None:
            return template
    return None


def format_exception(exception: Exception) -> Dict[str, Any]:
    """
    Render an exception for a presentation layer.

    Returns:
        Dict with 'code', 'title', 'description', 'help_text', 'severity'.
        Exceptions outside the Roster hierarchies get a generic message and
        the UNKNOWN_ERROR code; their text is never exposed.
    """
    template = get_exception_template(exception)
    if template is None:
        rendered = _FALLBACK_TEMPLATE.format(exception)
        rendered["code"] = UNKNOWN_ERROR_CODE
        return rendered

    rendered = template.format(exception)
    rendered["code"] = getattr(exception, "error_code", UNKNOWN_ERROR_CODE)
    return rendered
