"""
Domain models package for Roster.

Purpose
-------
Rich domain models with business logic. These models encapsulate the
character rules, validation, and state transitions; repositories store them
and services orchestrate them.

Base Classes
------------
- Entity: Objects with identity
- ValueObject: Immutable value types
- AggregateRoot: Consistency boundaries
- DomainEvent: State change notifications
"""

# Base domain model classes
from .base import (
    AggregateRoot,
    DomainEvent,
    Entity,
    ValueObject,
    validate_integer,
    validate_min_length,
    validate_not_empty,
    validate_range,
)

# Domain models
from .character import (
    CLASS_PROFILES,
    Capability,
    Character,
    CharacterClass,
    CharacterLevel,
    CharacterName,
    ClassProfile,
    LevelBand,
)

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    "AggregateRoot",
    "DomainEvent",
    # Validators
    "validate_integer",
    "validate_range",
    "validate_not_empty",
    "validate_min_length",
    # Character
    "Character",
    "CharacterName",
    "CharacterLevel",
    "CharacterClass",
    "LevelBand",
    "Capability",
    "ClassProfile",
    "CLASS_PROFILES",
]
