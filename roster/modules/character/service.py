"""
Character application service.

Purpose
-------
Expose the roster use cases (create, level up, remove, search, statistics,
duel preview) as named operations over an injected CharacterRepository.

Responsibilities
----------------
- Accept names, classes and levels as primitives or value objects
- Enforce use-case rules: unique names on create, existence on update/remove
- Delegate behavior to the Character aggregate and filtering to specifications
- Publish domain events after a successful save
- Serialize check-then-save use cases (create, level up, remove) with a
  per-service lock
- Log every operation with structured context

Non-Responsibilities
--------------------
- Storage details (repository backends)
- Presentation of errors (see roster.domain.exceptions.registry)
- Retries: every domain and repository error is logged and re-raised unchanged

Usage Example
-------------
>>> service = CharacterService(InMemoryCharacterRepository())
>>> service.create_character("Rex", "Guerreiro", 95)
>>> service.level_up_character("rex").level.value
96
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional

from roster.core.exceptions import RosterInfrastructureException
from roster.core.logging import LogContext, get_logger
from roster.domain.models.character import (
    Character,
    CharacterName,
    ClassLike,
    LevelBand,
    LevelLike,
    NameLike,
)
from roster.modules.character import specification as specs
from roster.modules.character.repository import CharacterRepository
from roster.modules.character.specification import Specification
from roster.modules.shared.base_service import BaseService, EventListener
from roster.modules.shared.exceptions import (
    CharacterAlreadyExistsError,
    CharacterNotFoundError,
    RosterDomainException,
    ValidationError,
)
from roster.modules.shared.formulas import calculate_average, update_bounds

if TYPE_CHECKING:
    from logging import Logger


# Statistics keys per level band
_BAND_KEYS: Dict[LevelBand, str] = {
    LevelBand.NOVICE: "novice",
    LevelBand.EXPERIENCED: "experienced",
    LevelBand.MASTER: "masters",
}


# ============================================================================
# RESULT TYPES
# ============================================================================


@dataclass
class CharacterStatistics:
    """Roster-wide aggregates; all fields are well defined for an empty roster."""

    total: int = 0
    by_class: Dict[str, int] = field(default_factory=dict)
    level_distribution: Dict[str, int] = field(
        default_factory=lambda: {key: 0 for key in _BAND_KEYS.values()}
    )
    average_level: float = 0
    highest_level: int = 0
    lowest_level: Optional[int] = None
    total_combat_power: float = 0.0

    @classmethod
    def from_characters(cls, characters: Iterable[Character]) -> CharacterStatistics:
        """Build statistics in a single pass."""
        stats = cls()
        level_sum = 0
        power_sum = 0.0

        for character in characters:
            level = character.level.value
            class_name = character.character_class.value

            stats.total += 1
            stats.by_class[class_name] = stats.by_class.get(class_name, 0) + 1
            stats.level_distribution[_BAND_KEYS[character.level.classify()]] += 1
            stats.lowest_level, stats.highest_level = update_bounds(
                stats.lowest_level, stats.highest_level, level
            )
            level_sum += level
            power_sum += character.calculate_combat_power()

        stats.average_level = calculate_average(level_sum, stats.total)
        stats.total_combat_power = round(power_sum, 1)
        return stats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "by_class": dict(self.by_class),
            "level_distribution": dict(self.level_distribution),
            "average_level": self.average_level,
            "highest_level": self.highest_level,
            "lowest_level": self.lowest_level,
            "total_combat_power": self.total_combat_power,
        }


@dataclass(frozen=True)
class DuelPreview:
    """Side-by-side combat power of two eligible opponents."""

    challenger: str
    opponent: str
    challenger_power: float
    opponent_power: float
    level_difference: int

    @property
    def favored(self) -> Optional[str]:
        """Name of the stronger side, or None on a tie."""
        if self.challenger_power > self.opponent_power:
            return self.challenger
        if self.opponent_power > self.challenger_power:
            return self.opponent
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "challenger": self.challenger,
            "opponent": self.opponent,
            "challenger_power": self.challenger_power,
            "opponent_power": self.opponent_power,
            "level_difference": self.level_difference,
            "favored": self.favored,
        }


# ============================================================================
# SERVICE
# ============================================================================


class CharacterService(BaseService):
    """
    Application service for the character roster.

    Args:
        repository: Any CharacterRepository implementation
        logger: Optional logger; defaults to this module's logger
        event_listener: Optional callable receiving published domain events

    Raises:
        ValidationError: If ``repository`` is not a CharacterRepository
    """

    COMPONENT = "character_service"

    def __init__(
        self,
        repository: CharacterRepository,
        logger: Optional[Logger] = None,
        event_listener: Optional[EventListener] = None,
    ) -> None:
        if not isinstance(repository, CharacterRepository):
            raise ValidationError(
                "repository",
                f"expected a CharacterRepository, got {type(repository).__name__}",
            )
        super().__init__(logger or get_logger(__name__), event_listener)
        self.repository = repository
        self._lock = threading.RLock()

    @contextmanager
    def _operation(
        self,
        operation: str,
        character: Optional[NameLike] = None,
        **context: Any,
    ) -> Iterator[None]:
        """Bind log context, log the call, and log any failure before re-raising."""
        with LogContext(
            component=self.COMPONENT,
            operation=operation,
            character=str(character) if character is not None else None,
        ):
            self.log_operation(operation, **context)
            try:
                yield
            except RosterDomainException as exc:
                self.log_rejection(operation, exc, **context)
                raise
            except RosterInfrastructureException as exc:
                self.log_error(operation, exc, **context)
                raise

    def _require(self, name: NameLike) -> Character:
        character = self.repository.find_by_name(CharacterName.of(name))
        if character is None:
            raise CharacterNotFoundError(str(name))
        return character

    # ========================================================================
    # QUERIES
    # ========================================================================

    def find_character_by_name(self, name: NameLike) -> Character:
        """
        Raises:
            CharacterNotFoundError: If no character has this name
        """
        with self._operation("find_character_by_name", name, character_name=str(name)):
            return self._require(name)

    def get_all_characters(self) -> List[Character]:
        with self._operation("get_all_characters"):
            characters = self.repository.find_all()
            self.log.debug("Characters retrieved", extra={"count": len(characters)})
            return characters

    def find_characters_by_class(self, character_class: ClassLike) -> List[Character]:
        with self._operation("find_characters_by_class", character_class=str(character_class)):
            return self.repository.find_by_class(character_class)

    def find_characters_by_level_range(
        self,
        min_level: LevelLike,
        max_level: LevelLike,
    ) -> List[Character]:
        """
        Raises:
            ValidationError: If min_level is greater than max_level
        """
        with self._operation(
            "find_characters_by_level_range",
            min_level=min_level,
            max_level=max_level,
        ):
            return self.repository.find_by_level_range(min_level, max_level)

    def find_characters_by_specification(self, specification: Specification) -> List[Character]:
        """
        Raises:
            InvalidSpecificationError: If ``specification`` is not a Specification
        """
        with self._operation("find_characters_by_specification", specification=repr(specification)):
            characters = self.repository.find_by_specification(specification)
            self.log.debug("Characters matched", extra={"count": len(characters)})
            return characters

    def find_experienced_characters(self) -> List[Character]:
        return self.find_characters_by_specification(specs.experienced())

    def find_master_characters(self) -> List[Character]:
        return self.find_characters_by_specification(specs.masters())

    def find_powerful_warriors(self) -> List[Character]:
        return self.find_characters_by_specification(specs.powerful_warriors())

    def find_expert_mages(self) -> List[Character]:
        return self.find_characters_by_specification(specs.expert_mages())

    def find_viable_opponents(self, name: NameLike) -> List[Character]:
        """
        Characters the named character may fight.

        Raises:
            CharacterNotFoundError: If no character has this name
        """
        with self._operation("find_viable_opponents", name, character_name=str(name)):
            character = self._require(name)
            opponents = self.repository.find_viable_opponents(character)
            self.log.debug("Viable opponents found", extra={"count": len(opponents)})
            return opponents

    # ========================================================================
    # COMMANDS
    # ========================================================================

    def create_character(
        self,
        name: NameLike,
        character_class: ClassLike,
        level: LevelLike,
    ) -> Character:
        """
        Create and store a new character.

        Raises:
            ValidationError: If name, class or level is invalid
            CharacterAlreadyExistsError: If the name is taken (any casing)
        """
        with self._operation(
            "create_character",
            name,
            character_name=str(name),
            character_class=str(character_class),
            level=level,
        ):
            with self._lock:
                character_name = CharacterName.of(name)
                if self.repository.exists(character_name):
                    raise CharacterAlreadyExistsError(character_name.value)

                character = Character(character_name, character_class, level)

                saved = self.repository.save(character)

            self.log.info(
                "Character created",
                extra={
                    "character_name": saved.name.value,
                    "character_class": saved.character_class.value,
                    "level": saved.level.value,
                    "combat_power": saved.calculate_combat_power(),
                },
            )
            return saved

    def remove_character(self, name: NameLike) -> bool:
        """
        Raises:
            CharacterNotFoundError: If no character has this name
        """
        with self._operation("remove_character", name, character_name=str(name)):
            with self._lock:
                removed = self.repository.remove(CharacterName.of(name))
            if not removed:
                raise CharacterNotFoundError(str(name))
            self.log.info("Character removed", extra={"character_name": str(name)})
            return True

    def level_up_character(self, name: NameLike) -> Character:
        """
        Raise the named character's level by one and store it.

        Raises:
            CharacterNotFoundError: If no character has this name
            MaxLevelReachedError: If the character is already at the maximum
                level; nothing is stored
        """
        with self._operation("level_up_character", name, character_name=str(name)):
            with self._lock:
                character = self._require(name)
                old_level = character.level.value

                character.level_up()
                saved = self.repository.save(character)
            self.publish_events(character)

            self.log.info(
                "Character leveled up",
                extra={
                    "character_name": saved.name.value,
                    "old_level": old_level,
                    "new_level": saved.level.value,
                    "combat_power": saved.calculate_combat_power(),
                },
            )
            return saved

    # ========================================================================
    # ANALYSIS
    # ========================================================================

    def get_character_statistics(self) -> CharacterStatistics:
        with self._operation("get_character_statistics"):
            stats = CharacterStatistics.from_characters(self.repository.find_all())
            self.log.debug("Statistics computed", extra={"statistics": stats.to_dict()})
            return stats

    def preview_duel(self, challenger: NameLike, opponent: NameLike) -> DuelPreview:
        """
        Compare two characters that are allowed to fight.

        Raises:
            CharacterNotFoundError: If either character is missing
            BusinessRuleViolationError: If they are the same character or too
                far apart in level
        """
        with self._operation(
            "preview_duel",
            challenger,
            challenger=str(challenger),
            opponent=str(opponent),
        ):
            first = self._require(challenger)
            second = self._require(opponent)
            first.assert_can_fight(second)

            return DuelPreview(
                challenger=first.name.value,
                opponent=second.name.value,
                challenger_power=first.calculate_combat_power(),
                opponent_power=second.calculate_combat_power(),
                level_difference=first.level.difference_from(second.level),
            )
