"""
Base Service Foundation

Purpose
-------
Provides the foundational class for application services in Roster.
Services orchestrate repositories and domain models, enforce use-case level
rules, and publish the domain events recorded by aggregates.

Design Notes
------------
This base class provides:
- Structured logging with operation context
- Domain event publication helpers
- Common error logging patterns

What this class does NOT do:
- Own storage (repositories are injected)
- Contain character-specific logic
- Swallow or retry errors

Usage
-----
    class CharacterService(BaseService):
        def __init__(self, repository, logger=None):
            super().__init__(logger or get_logger(__name__))
            self.repository = repository
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional

if TYPE_CHECKING:
    from logging import Logger

    from roster.domain.models.base import DomainEvent, Entity

EventListener = Callable[["DomainEvent"], None]


class BaseService:
    """
    Base class for application services.

    Args:
        logger: Structured logger instance
        event_listener: Optional callable receiving each published domain event
    """

    def __init__(
        self,
        logger: Logger,
        event_listener: Optional[EventListener] = None,
    ) -> None:
        self.log = logger
        self._event_listener = event_listener

    def publish_events(self, entity: Entity) -> List[DomainEvent]:
        """
        Drain the entity's pending domain events and hand them to the listener.

        Call only after the entity has been persisted.

        Returns:
            The events that were published
        """
        events = entity.clear_domain_events()
        for event in events:
            self.log.debug(
                f"Domain event: {event.event_name}",
                extra={"event_name": event.event_name, "payload": event.payload},
            )
            if self._event_listener is not None:
                self._event_listener(event)
        return events

    def log_operation(self, operation: str, **context: Any) -> None:
        """
        Log a service operation with structured context.

        Args:
            operation: Name of the operation being performed
            **context: Additional context data
        """
        self.log.info(
            f"Service operation: {operation}",
            extra={"operation": operation, **context},
        )

    def log_error(
        self,
        operation: str,
        error: Exception,
        **context: Any,
    ) -> None:
        """
        Log a service error with full context.

        Args:
            operation: Name of the operation that failed
            error: The exception that occurred
            **context: Additional context data
        """
        self.log.error(
            f"Service error during {operation}: {str(error)}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "error_message": str(error),
                **context,
            },
        )

    def log_rejection(
        self,
        operation: str,
        error: Exception,
        **context: Any,
    ) -> None:
        """
        Log an expected domain rejection (bad input, missing character) at WARNING.
        """
        self.log.warning(
            f"Service rejected {operation}: {str(error)}",
            extra={
                "operation": operation,
                "error_type": type(error).__name__,
                "error_code": getattr(error, "error_code", None),
                **context,
            },
        )
