"""
Character module for Roster.

Purpose
-------
Everything built on the Character aggregate: query specifications, the
repository contract with its in-memory and SQL backends, the application
service and its async adapter.

Usage
-----
    from roster.modules.character import (
        CharacterService,
        InMemoryCharacterRepository,
        by_minimum_level,
        experienced,
    )

    service = CharacterService(InMemoryCharacterRepository.with_defaults())
    veterans = service.find_characters_by_specification(
        by_minimum_level(20) & experienced()
    )
"""

from .async_adapter import AsyncCharacterService
from .memory_repository import DEFAULT_CHARACTERS, InMemoryCharacterRepository
from .repository import CharacterRepository
from .service import CharacterService, CharacterStatistics, DuelPreview
from .specification import (
    And,
    ByClass,
    ByMinimumCombatPower,
    ByMinimumLevel,
    ByNamePattern,
    Experienced,
    Master,
    Not,
    Or,
    Specification,
    by_class,
    by_minimum_combat_power,
    by_minimum_level,
    by_name_pattern,
    evaluate,
    expert_mages,
    experienced,
    masters,
    powerful_warriors,
)
from .sql_repository import SqlCharacterRepository, create_roster_engine

__all__ = [
    # Service
    "CharacterService",
    "AsyncCharacterService",
    "CharacterStatistics",
    "DuelPreview",
    # Repositories
    "CharacterRepository",
    "InMemoryCharacterRepository",
    "SqlCharacterRepository",
    "create_roster_engine",
    "DEFAULT_CHARACTERS",
    # Specifications
    "Specification",
    "ByClass",
    "ByMinimumLevel",
    "Experienced",
    "Master",
    "ByMinimumCombatPower",
    "ByNamePattern",
    "And",
    "Or",
    "Not",
    "evaluate",
    "by_class",
    "by_minimum_level",
    "experienced",
    "masters",
    "by_minimum_combat_power",
    "by_name_pattern",
    "powerful_warriors",
    "expert_mages",
]
