"""
Base domain model classes for Roster.

Purpose
-------
Provide foundational abstractions for rich domain models that encapsulate
business logic, validation, and state transitions following Domain-Driven
Design.

Responsibilities
----------------
- Define base Entity class with identity and equality semantics
- Define base ValueObject class for immutable value types
- Define base AggregateRoot class for consistency boundaries
- Provide validation helpers raising structured domain exceptions
- Track domain events recorded by aggregates

Non-Responsibilities
--------------------
- Persistence (handled by repositories)
- Service orchestration (handled by CharacterService)

Design Patterns
---------------
- **Entity**: Objects with identity that persist over time
- **Value Object**: Immutable objects defined by their attributes
- **Aggregate Root**: Consistency boundary for domain operations
- **Domain Events**: Record state changes for the service layer to publish

Usage Example
-------------
>>> class Party(AggregateRoot):
...     def __init__(self, name: str):
...         super().__init__(name)
...         self._members = []
...
...     def recruit(self, member) -> None:
...         self._members.append(member)
...         self.add_domain_event("party.member_recruited", {"party": self.id})
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Hashable, List, Optional

from roster.modules.shared.exceptions import ValidationError


# ============================================================================
# DOMAIN EVENTS
# ============================================================================


@dataclass
class DomainEvent:
    """
    Represents a domain event that has occurred.

    Attributes
    ----------
    event_name : str
        Event name (e.g., "character.leveled_up")
    payload : Dict[str, Any]
        Event payload with relevant data
    occurred_at : datetime
        When the event occurred (UTC)
    """

    event_name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


# ============================================================================
# VALUE OBJECT
# ============================================================================


class ValueObject(ABC):
    """
    Base class for immutable value objects.

    Value objects are defined by their attributes, not by identity.
    Concrete value objects in Roster are frozen dataclasses inheriting from
    this class; they validate in ``__post_init__`` so no partially
    constructed instance can exist.

    Characteristics
    ---------------
    - Immutable: Cannot be changed after creation
    - No identity: Equality based on attributes, not ID
    - Side-effect free: Methods return new instances
    - Self-validating: Validates invariants on construction
    """

    def equals(self, other: object) -> bool:
        """Explicit equality, same semantics as ``==``."""
        return self == other


# ============================================================================
# ENTITY
# ============================================================================


class Entity(ABC):
    """
    Base class for entities with identity.

    Entities are defined by their identity, not their attributes. Two
    entities with the same identity are considered the same entity, even if
    their attributes differ. The identity may be any hashable value,
    including a value object.

    Usage
    -----
    Subclasses should:
    1. Call super().__init__(entity_id) in constructor
    2. Define business methods that modify state
    3. Record domain events for significant state changes
    """

    def __init__(self, entity_id: Hashable) -> None:
        self._id = entity_id
        self._domain_events: List[DomainEvent] = []

    @property
    def id(self) -> Hashable:
        """Get entity identity (immutable)."""
        return self._id

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they are the same type with the same identity."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def add_domain_event(self, event_name: str, payload: Dict[str, Any]) -> None:
        """
        Record a domain event to be published by the service layer.

        Examples
        --------
        >>> self.add_domain_event("character.leveled_up", {
        ...     "name": "Aragorn",
        ...     "old_level": 10,
        ...     "new_level": 11,
        ... })
        """
        self._domain_events.append(DomainEvent(event_name=event_name, payload=payload))

    def clear_domain_events(self) -> List[DomainEvent]:
        """
        Clear and return all domain events.

        Typically called by the service after persisting the entity.
        """
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events

    def get_pending_events(self) -> List[DomainEvent]:
        """Get domain events without clearing them."""
        return self._domain_events.copy()


# ============================================================================
# AGGREGATE ROOT
# ============================================================================


class AggregateRoot(Entity):
    """
    Base class for aggregate roots.

    The aggregate root is the entry point for all operations on the
    aggregate and the only object repositories store and return.

    Subclasses should:
    1. Expose business methods that maintain aggregate invariants
    2. Never expose mutable internals
    3. Record domain events for significant state transitions
    """

    pass  # Inherits all behavior from Entity


# ============================================================================
# DOMAIN MODEL VALIDATION
# ============================================================================

ErrorFactory = Callable[[str, Any], ValidationError]


def _fail(
    field_name: str,
    message: str,
    value: Any,
    error: Optional[ErrorFactory],
) -> ValidationError:
    if error is not None:
        return error(message, value)
    return ValidationError(field_name, message, value=value)


def validate_integer(
    value: Any,
    field_name: str,
    error: Optional[ErrorFactory] = None,
) -> None:
    """
    Validate that a value is an ``int`` (``bool`` is rejected).

    Raises
    ------
    ValidationError
        If value is not an integer
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail(
            field_name,
            f"{field_name} must be an integer, got {type(value).__name__}",
            value,
            error,
        )


def validate_range(
    value: int,
    min_val: int,
    max_val: int,
    field_name: str,
    error: Optional[ErrorFactory] = None,
) -> None:
    """
    Validate that a value is within an inclusive range.

    Raises
    ------
    ValidationError
        If value is outside the range
    """
    if not (min_val <= value <= max_val):
        raise _fail(
            field_name,
            f"{field_name} must be between {min_val} and {max_val}, got {value}",
            value,
            error,
        )


def validate_not_empty(
    value: Any,
    field_name: str,
    error: Optional[ErrorFactory] = None,
) -> None:
    """
    Validate that a value is a non-blank string.

    Raises
    ------
    ValidationError
        If value is not a string, or is empty or whitespace-only
    """
    if not isinstance(value, str):
        raise _fail(
            field_name,
            f"{field_name} must be a string, got {type(value).__name__}",
            value,
            error,
        )
    if not value.strip():
        raise _fail(field_name, f"{field_name} cannot be empty", value, error)


def validate_min_length(
    value: str,
    min_length: int,
    field_name: str,
    error: Optional[ErrorFactory] = None,
) -> None:
    """
    Validate that a string has at least ``min_length`` characters.

    Raises
    ------
    ValidationError
        If value is shorter than min_length
    """
    if len(value) < min_length:
        raise _fail(
            field_name,
            f"{field_name} must have at least {min_length} characters, got {len(value)}",
            value,
            error,
        )
