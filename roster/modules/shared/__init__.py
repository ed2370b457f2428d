"""
Roster Shared Module

Purpose
-------
Provides domain-level foundations for the feature modules:
- Domain exceptions and error handling
- Base service and repository patterns
- Gameplay constants and formulas

Architecture
------------
- BaseService: Foundation for service classes (logging, events)
- BaseRepository: Type-safe database access patterns
- Domain exceptions: Validation failures and business rule violations
- Formulas: Pure calculation functions for character mechanics
- Constants: Level bounds, band thresholds and combat numbers

Nothing here imports ``roster.core``; the infrastructure exceptions depend on
this package, not the other way round.

Usage
-----
    from roster.modules.shared import (
        BaseService,
        CharacterNotFoundError,
        calculate_combat_power,
    )
"""

from __future__ import annotations

# Base patterns
from .base_repository import BaseRepository
from .base_service import BaseService

# Domain exceptions
from .exceptions import (
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

# Domain constants
from .constants import (
    ARCHER_COMBAT_MULTIPLIER,
    EXPERIENCED_LEVEL_THRESHOLD,
    MAGICAL_COMBAT_MULTIPLIER,
    MASTER_LEVEL_THRESHOLD,
    MAX_COMBAT_MULTIPLIER,
    MAX_FIGHT_LEVEL_GAP,
    MAX_LEVEL,
    MIN_LEVEL,
    NAME_MIN_LENGTH,
    PALADIN_COMBAT_MULTIPLIER,
    POWERFUL_WARRIOR_MIN_LEVEL,
    WARRIOR_COMBAT_MULTIPLIER,
)

# Formulas
from .formulas import (
    calculate_average,
    calculate_combat_power,
    calculate_level_difference,
    update_bounds,
)

__all__ = [
    # Base patterns
    "BaseService",
    "BaseRepository",
    # Exceptions
    "RosterDomainException",
    "ErrorSeverity",
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
    "is_transient_error",
    "get_error_severity",
    "should_alert",
    # Constants
    "NAME_MIN_LENGTH",
    "MIN_LEVEL",
    "MAX_LEVEL",
    "EXPERIENCED_LEVEL_THRESHOLD",
    "MASTER_LEVEL_THRESHOLD",
    "MAX_FIGHT_LEVEL_GAP",
    "MAGICAL_COMBAT_MULTIPLIER",
    "ARCHER_COMBAT_MULTIPLIER",
    "PALADIN_COMBAT_MULTIPLIER",
    "WARRIOR_COMBAT_MULTIPLIER",
    "MAX_COMBAT_MULTIPLIER",
    "POWERFUL_WARRIOR_MIN_LEVEL",
    # Formulas
    "calculate_combat_power",
    "calculate_level_difference",
    "calculate_average",
    "update_bounds",
]
