"""
Character repository contract.

Purpose
-------
Define the storage-agnostic contract every character store satisfies, so the
CharacterService works unchanged over the in-memory and SQL backends.

Contract
--------
- Identity is the case-insensitive character name
- ``save`` is an upsert keyed by name; an overwritten entry keeps its place
  in insertion order
- Read operations return new lists of independent Character objects; mutating
  a returned character never changes stored state until it is saved
- ``find_by_level_range`` rejects ``min > max`` with ValidationError

Backends implement the six storage primitives (``find_by_name``,
``find_all``, ``save``, ``remove``, ``exists``, ``count``). The query methods
have default implementations over ``find_all`` that a backend may override
with a native query, as long as results stay identical.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Tuple

from roster.domain.models.character import (
    Character,
    CharacterLevel,
    CharacterName,
    ClassLike,
    LevelLike,
    NameLike,
)
from roster.modules.character.specification import (
    Specification,
    by_class,
    by_name_pattern,
    ensure_specification,
    evaluate,
    experienced,
)
from roster.modules.shared.exceptions import ValidationError


class CharacterRepository(ABC):
    """Abstract character store. See module docstring for the contract."""

    # ========================================================================
    # STORAGE PRIMITIVES
    # ========================================================================

    @abstractmethod
    def find_by_name(self, name: NameLike) -> Optional[Character]:
        """Character with this name (any casing), or None."""

    @abstractmethod
    def find_all(self) -> List[Character]:
        """Every character, in insertion order."""

    @abstractmethod
    def save(self, character: Character) -> Character:
        """Insert or overwrite the entry with ``character``'s name."""

    @abstractmethod
    def remove(self, name: NameLike) -> bool:
        """Delete by name; True if an entry existed."""

    @abstractmethod
    def exists(self, name: NameLike) -> bool:
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    # ========================================================================
    # QUERIES
    # ========================================================================

    def find_by_specification(self, specification: Specification) -> List[Character]:
        """
        Characters satisfying ``specification``, in insertion order.

        Raises
        ------
        InvalidSpecificationError
            If ``specification`` is not a Specification
        """
        spec = ensure_specification(specification)
        return [character for character in self.find_all() if evaluate(spec, character)]

    def find_by_class(self, character_class: ClassLike) -> List[Character]:
        return self.find_by_specification(by_class(character_class))

    def find_by_level_range(
        self,
        min_level: LevelLike,
        max_level: LevelLike,
    ) -> List[Character]:
        """
        Characters whose level lies in [min_level, max_level].

        Raises
        ------
        ValidationError
            If min_level is greater than max_level
        """
        low, high = self._check_level_range(min_level, max_level)
        return [
            character
            for character in self.find_all()
            if not low.is_greater_than(character.level)
            and not character.level.is_greater_than(high)
        ]

    def find_by_name_pattern(self, pattern: str) -> List[Character]:
        """Case-insensitive regular expression search over names."""
        return self.find_by_specification(by_name_pattern(pattern))

    def find_experienced(self) -> List[Character]:
        return self.find_by_specification(experienced())

    def find_viable_opponents(self, character: Character) -> List[Character]:
        """Characters that ``character`` may fight (never itself)."""
        self._check_character(character)
        return [
            candidate
            for candidate in self.find_all()
            if character.can_fight(candidate)
        ]

    # ========================================================================
    # ARGUMENT CHECKS
    # ========================================================================

    @staticmethod
    def _check_character(character: Any) -> Character:
        if not isinstance(character, Character):
            raise ValidationError(
                "character",
                f"expected a Character, got {type(character).__name__}",
            )
        return character

    @staticmethod
    def _check_level_range(
        min_level: LevelLike,
        max_level: LevelLike,
    ) -> Tuple[CharacterLevel, CharacterLevel]:
        low = CharacterLevel.of(min_level)
        high = CharacterLevel.of(max_level)
        if low.is_greater_than(high):
            raise ValidationError(
                "level_range",
                f"minimum level {low.value} is greater than maximum level {high.value}",
                value={"min": low.value, "max": high.value},
            )
        return low, high

    @staticmethod
    def _key(name: NameLike) -> str:
        return CharacterName.of(name).key

