"""
Character Domain Model for Roster.

Purpose
-------
Rich domain model representing a character with validated identity, level and
class, plus the behavior built on them: level progression, combat power and
fight eligibility.

Responsibilities
----------------
- Enforce name, level and class invariants at construction
- Classify levels into novice / experienced / master bands
- Handle level-up at the level cap
- Decide whether two characters may fight
- Convert to and from the flat ``{name, class, level}`` record

Non-Responsibilities
--------------------
- Persistence (handled by repositories)
- Uniqueness of names (handled by repositories and CharacterService)
- Presentation of errors (handled by the exception registry)

Usage Example
-------------
>>> aragorn = Character("Aragorn", "guerreiro", 10)
>>> aragorn.character_class.value
'Guerreiro'
>>> aragorn.level_up()
True
>>> aragorn.to_plain_object()
{'name': 'Aragorn', 'class': 'Guerreiro', 'level': 11}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

from roster.domain.models.base import (
    AggregateRoot,
    ValueObject,
    validate_integer,
    validate_min_length,
    validate_not_empty,
    validate_range,
)
from roster.modules.shared.constants import (
    ARCHER_COMBAT_MULTIPLIER,
    EXPERIENCED_LEVEL_THRESHOLD,
    MAGICAL_COMBAT_MULTIPLIER,
    MASTER_LEVEL_THRESHOLD,
    MAX_FIGHT_LEVEL_GAP,
    MAX_LEVEL,
    MIN_LEVEL,
    NAME_MIN_LENGTH,
    PALADIN_COMBAT_MULTIPLIER,
    WARRIOR_COMBAT_MULTIPLIER,
)
from roster.modules.shared.exceptions import (
    BusinessRuleViolationError,
    InvalidClassError,
    InvalidLevelError,
    InvalidNameError,
    MaxLevelReachedError,
    ValidationError,
)
from roster.modules.shared.formulas import (
    calculate_combat_power,
    calculate_level_difference,
)


# ============================================================================
# ENUMERATIONS
# ============================================================================


class LevelBand(Enum):
    """Fixed classification bands over the level range."""

    NOVICE = "novice"
    EXPERIENCED = "experienced"
    MASTER = "master"


class Capability(Enum):
    """How a class deals damage."""

    MELEE = "melee"
    MAGICAL = "magical"


@dataclass(frozen=True)
class ClassProfile:
    """Static data for one character class."""

    canonical_name: str
    aliases: Tuple[str, ...]
    capability: Capability
    abilities: Tuple[str, ...]
    combat_multiplier: float


CLASS_PROFILES: Dict[str, ClassProfile] = {
    "Guerreiro": ClassProfile(
        canonical_name="Guerreiro",
        aliases=("warrior",),
        capability=Capability.MELEE,
        abilities=("Power Strike", "Shield Block", "Battle Cry"),
        combat_multiplier=WARRIOR_COMBAT_MULTIPLIER,
    ),
    "Mago": ClassProfile(
        canonical_name="Mago",
        aliases=("mage",),
        capability=Capability.MAGICAL,
        abilities=("Fireball", "Frost Nova", "Arcane Shield"),
        combat_multiplier=MAGICAL_COMBAT_MULTIPLIER,
    ),
    "Arqueiro": ClassProfile(
        canonical_name="Arqueiro",
        aliases=("archer",),
        capability=Capability.MELEE,
        abilities=("Precise Shot", "Arrow Rain", "Evasion"),
        combat_multiplier=ARCHER_COMBAT_MULTIPLIER,
    ),
    "Paladino": ClassProfile(
        canonical_name="Paladino",
        aliases=("paladin",),
        capability=Capability.MELEE,
        abilities=("Holy Strike", "Divine Shield", "Healing Light"),
        combat_multiplier=PALADIN_COMBAT_MULTIPLIER,
    ),
}

# Lower-cased canonical names and aliases -> canonical name
_CLASS_LOOKUP: Dict[str, str] = {
    key: profile.canonical_name
    for profile in CLASS_PROFILES.values()
    for key in (profile.canonical_name.lower(), *profile.aliases)
}


# ============================================================================
# VALUE OBJECTS
# ============================================================================


@dataclass(frozen=True, eq=False)
class CharacterName(ValueObject):
    """
    Immutable character name.

    Trimmed on construction; at least two characters long. Equality and
    hashing ignore case, so "Rex" and "rex" name the same character.
    """

    value: str

    def __post_init__(self) -> None:
        validate_not_empty(self.value, "name", error=InvalidNameError)
        trimmed = self.value.strip()
        validate_min_length(trimmed, NAME_MIN_LENGTH, "name", error=InvalidNameError)
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def of(cls, name: NameLike) -> CharacterName:
        """Return ``name`` unchanged if already a CharacterName, else wrap it."""
        return name if isinstance(name, cls) else cls(name)

    @property
    def key(self) -> str:
        """Lower-cased form used as the storage key."""
        return self.value.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterName):
            return False
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class CharacterLevel(ValueObject):
    """
    Immutable character level in [1, 100].

    Ordered by value, so levels compare with ``<`` / ``>`` as well as the
    explicit ``is_greater_than`` / ``difference_from`` helpers.
    """

    value: int

    def __post_init__(self) -> None:
        validate_integer(self.value, "level", error=InvalidLevelError)
        validate_range(self.value, MIN_LEVEL, MAX_LEVEL, "level", error=InvalidLevelError)

    @classmethod
    def of(cls, level: LevelLike) -> CharacterLevel:
        return level if isinstance(level, cls) else cls(level)

    def classify(self) -> LevelBand:
        if self.value >= MASTER_LEVEL_THRESHOLD:
            return LevelBand.MASTER
        if self.value >= EXPERIENCED_LEVEL_THRESHOLD:
            return LevelBand.EXPERIENCED
        return LevelBand.NOVICE

    def is_novice(self) -> bool:
        return self.classify() is LevelBand.NOVICE

    def is_experienced(self) -> bool:
        return self.classify() is LevelBand.EXPERIENCED

    def is_master(self) -> bool:
        return self.classify() is LevelBand.MASTER

    def is_max(self) -> bool:
        return self.value == MAX_LEVEL

    def is_greater_than(self, other: CharacterLevel) -> bool:
        return self.value > other.value

    def difference_from(self, other: CharacterLevel) -> int:
        """Absolute level gap, never negative."""
        return calculate_level_difference(self.value, other.value)

    def next(self) -> CharacterLevel:
        """
        Return the following level.

        Raises
        ------
        MaxLevelReachedError
            If this is already the maximum level
        """
        if self.is_max():
            raise MaxLevelReachedError(MAX_LEVEL)
        return CharacterLevel(self.value + 1)

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return f"level {self.value}"


@dataclass(frozen=True)
class CharacterClass(ValueObject):
    """
    Immutable character class.

    Accepts canonical names and English aliases in any casing and stores the
    canonical spelling (e.g. "mage" -> "Mago").
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidClassError(
                f"class must be a string, got {type(self.value).__name__}", self.value
            )
        canonical = _CLASS_LOOKUP.get(self.value.strip().lower())
        if canonical is None:
            raise InvalidClassError(
                f"Unknown character class '{self.value}'. "
                f"Valid classes: {', '.join(self.available())}",
                self.value,
            )
        object.__setattr__(self, "value", canonical)

    @classmethod
    def of(cls, character_class: ClassLike) -> CharacterClass:
        return character_class if isinstance(character_class, cls) else cls(character_class)

    @staticmethod
    def available() -> Tuple[str, ...]:
        """Canonical names of every known class."""
        return tuple(CLASS_PROFILES)

    @property
    def profile(self) -> ClassProfile:
        return CLASS_PROFILES[self.value]

    @property
    def capability(self) -> Capability:
        return self.profile.capability

    @property
    def combat_multiplier(self) -> float:
        return self.profile.combat_multiplier

    def abilities(self) -> Tuple[str, ...]:
        return self.profile.abilities

    def is_melee_class(self) -> bool:
        return self.capability is Capability.MELEE

    def is_magical_class(self) -> bool:
        return self.capability is Capability.MAGICAL

    def __str__(self) -> str:
        return self.value


NameLike = Union[CharacterName, str]
LevelLike = Union[CharacterLevel, int]
ClassLike = Union[CharacterClass, str]


# ============================================================================
# CHARACTER AGGREGATE ROOT
# ============================================================================


class Character(AggregateRoot):
    """
    Character aggregate root.

    Identity is the CharacterName (case-insensitive). The constructor accepts
    value objects or raw primitives and normalizes them, so every live
    Character holds a valid name, class and level.

    Business Rules
    --------------
    - Level only changes through level_up(), one step at a time, up to 100
    - A character cannot fight itself
    - Opponents may be at most MAX_FIGHT_LEVEL_GAP levels apart

    Domain Events
    -------------
    - character.leveled_up: When the character gains a level
    """

    def __init__(
        self,
        name: NameLike,
        character_class: ClassLike,
        level: LevelLike,
    ) -> None:
        character_name = CharacterName.of(name)
        super().__init__(character_name)
        self._name = character_name
        self._class = CharacterClass.of(character_class)
        self._level = CharacterLevel.of(level)

    # ========================================================================
    # STATE ACCESS
    # ========================================================================

    @property
    def name(self) -> CharacterName:
        return self._name

    @property
    def character_class(self) -> CharacterClass:
        return self._class

    @property
    def level(self) -> CharacterLevel:
        return self._level

    def is_novice(self) -> bool:
        return self._level.is_novice()

    def is_experienced(self) -> bool:
        return self._level.is_experienced()

    def is_master(self) -> bool:
        return self._level.is_master()

    # ========================================================================
    # BEHAVIOR
    # ========================================================================

    def level_up(self) -> bool:
        """
        Raise the level by one.

        Returns
        -------
        bool
            True once the level has been raised

        Raises
        ------
        MaxLevelReachedError
            If already at the maximum level; the level is left unchanged
        """
        if self._level.is_max():
            raise MaxLevelReachedError(MAX_LEVEL, name=self._name.value)

        old_level = self._level
        self._level = old_level.next()

        self.add_domain_event(
            "character.leveled_up",
            {
                "name": self._name.value,
                "old_level": old_level.value,
                "new_level": self._level.value,
            },
        )
        return True

    def calculate_combat_power(self) -> float:
        """Combat power derived from level and class; pure and deterministic."""
        return calculate_combat_power(self._level.value, self._class.combat_multiplier)

    def is_same_character(self, other: Character) -> bool:
        return self._name == other.name

    def can_fight(self, other: Character) -> bool:
        """True unless ``other`` is this character or too far apart in level."""
        if self.is_same_character(other):
            return False
        return self._level.difference_from(other.level) <= MAX_FIGHT_LEVEL_GAP

    def assert_can_fight(self, other: Character) -> None:
        """
        Raising variant of can_fight().

        Raises
        ------
        BusinessRuleViolationError
            If ``other`` is this character or the level gap is too large
        """
        if self.is_same_character(other):
            raise BusinessRuleViolationError(
                "A character cannot fight itself",
                details={"name": self._name.value},
            )

        difference = self._level.difference_from(other.level)
        if difference > MAX_FIGHT_LEVEL_GAP:
            raise BusinessRuleViolationError(
                f"Level difference too high: {difference}",
                details={
                    "difference": difference,
                    "max_allowed_difference": MAX_FIGHT_LEVEL_GAP,
                },
            )

    def describe(self) -> str:
        return (
            f"{self._name.value} - {self._class.value} "
            f"(level {self._level.value}, {self._level.classify().value})"
        )

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_plain_object(self) -> Dict[str, Any]:
        return {
            "name": self._name.value,
            "class": self._class.value,
            "level": self._level.value,
        }

    @classmethod
    def from_plain_object(cls, data: Mapping[str, Any]) -> Character:
        """
        Rebuild a Character from ``{name, class, level}``.

        Every field goes back through the value object constructors, so
        invalid stored data fails here rather than later.
        """
        if not isinstance(data, Mapping):
            raise ValidationError(
                "character",
                f"expected a mapping, got {type(data).__name__}",
                value=data,
            )
        return cls(data.get("name"), data.get("class"), data.get("level"))

    def snapshot(self) -> Character:
        """Independent copy with the same state and no pending events."""
        return Character(self._name, self._class, self._level)

    def __repr__(self) -> str:
        return (
            f"Character(name={self._name.value!r}, "
            f"character_class={self._class.value!r}, level={self._level.value!r})"
        )
