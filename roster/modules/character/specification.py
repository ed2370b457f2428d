"""
Character specifications: composable query criteria.

Purpose
-------
Express roster searches declaratively. A specification is an immutable node
in a small expression tree: leaf predicates over a Character plus the
``And`` / ``Or`` / ``Not`` combinators. Repositories filter with
``evaluate(spec, character)``.

Design Notes
------------
- Every node is a frozen dataclass, so specifications are hashable, comparable
  and safe to share between threads.
- ``evaluate`` is the single recursive interpreter. It knows every built-in
  node kind; any other ``Specification`` subclass is evaluated through its
  ``matches`` method, which is how new leaf kinds are added.
- ``And`` / ``Or`` evaluate the left operand first and short-circuit.
- Compose with methods (``a.and_(b)``) or operators (``a & b``, ``a | b``, ``~a``).

Usage
-----
>>> spec = by_minimum_level(60) & experienced()
>>> repository.find_by_specification(spec)
"""

from __future__ import annotations

import re
from abc import ABC
from dataclasses import dataclass, field
from typing import Any, Pattern, Union

from roster.domain.models.character import (
    Character,
    CharacterClass,
    CharacterLevel,
)
from roster.modules.shared.constants import POWERFUL_WARRIOR_MIN_LEVEL
from roster.modules.shared.exceptions import InvalidSpecificationError


class Specification(ABC):
    """
    Base class for all character specifications.

    Built-in node kinds are interpreted by ``evaluate``. Custom leaf kinds
    subclass this and override ``matches``.
    """

    def matches(self, character: Character) -> bool:
        """Leaf predicate for custom node kinds; built-in kinds never call this."""
        raise NotImplementedError(
            f"{type(self).__name__} must implement matches()"
        )

    def is_satisfied_by(self, character: Character) -> bool:
        return evaluate(self, character)

    def and_(self, other: Specification) -> Specification:
        return And(self, other)

    def or_(self, other: Specification) -> Specification:
        return Or(self, other)

    def not_(self) -> Specification:
        return Not(self)

    def __and__(self, other: Specification) -> Specification:
        return And(self, other)

    def __or__(self, other: Specification) -> Specification:
        return Or(self, other)

    def __invert__(self) -> Specification:
        return Not(self)


def ensure_specification(candidate: Any, name: str = "search") -> Specification:
    """
    Return ``candidate`` if it is a Specification.

    Raises
    ------
    InvalidSpecificationError
        If ``candidate`` is missing or of another type
    """
    if not isinstance(candidate, Specification):
        raise InvalidSpecificationError(
            name,
            f"expected a Specification, got {type(candidate).__name__}",
        )
    return candidate


# ============================================================================
# LEAF NODES
# ============================================================================


@dataclass(frozen=True)
class ByClass(Specification):
    character_class: CharacterClass

    def __post_init__(self) -> None:
        object.__setattr__(self, "character_class", CharacterClass.of(self.character_class))


@dataclass(frozen=True)
class ByMinimumLevel(Specification):
    """Level at or above ``level`` (inclusive)."""

    level: CharacterLevel

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", CharacterLevel.of(self.level))


@dataclass(frozen=True)
class Experienced(Specification):
    pass


@dataclass(frozen=True)
class Master(Specification):
    pass


@dataclass(frozen=True)
class ByMinimumCombatPower(Specification):
    """Combat power at or above ``power`` (inclusive)."""

    power: float

    def __post_init__(self) -> None:
        if isinstance(self.power, bool) or not isinstance(self.power, (int, float)):
            raise InvalidSpecificationError(
                "by_minimum_combat_power",
                f"power must be a number, got {type(self.power).__name__}",
            )


@dataclass(frozen=True)
class ByNamePattern(Specification):
    """Case-insensitive regular expression search anywhere in the name."""

    pattern: str
    regex: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str):
            raise InvalidSpecificationError(
                "by_name_pattern",
                f"pattern must be a string, got {type(self.pattern).__name__}",
            )
        try:
            compiled = re.compile(self.pattern, re.IGNORECASE)
        except re.error as exc:
            raise InvalidSpecificationError(
                "by_name_pattern", f"invalid pattern {self.pattern!r}: {exc}"
            ) from exc
        object.__setattr__(self, "regex", compiled)


# ============================================================================
# COMBINATORS
# ============================================================================


@dataclass(frozen=True)
class And(Specification):
    left: Specification
    right: Specification

    def __post_init__(self) -> None:
        ensure_specification(self.left, "and")
        ensure_specification(self.right, "and")


@dataclass(frozen=True)
class Or(Specification):
    left: Specification
    right: Specification

    def __post_init__(self) -> None:
        ensure_specification(self.left, "or")
        ensure_specification(self.right, "or")


@dataclass(frozen=True)
class Not(Specification):
    spec: Specification

    def __post_init__(self) -> None:
        ensure_specification(self.spec, "not")


# ============================================================================
# INTERPRETER
# ============================================================================


def evaluate(spec: Specification, character: Character) -> bool:
    """
    Evaluate ``spec`` against ``character``.

    Pure and side-effect free. ``And`` / ``Or`` evaluate left first and
    short-circuit.

    Raises
    ------
    InvalidSpecificationError
        If ``spec`` is not a Specification
    """
    if isinstance(spec, And):
        return evaluate(spec.left, character) and evaluate(spec.right, character)
    if isinstance(spec, Or):
        return evaluate(spec.left, character) or evaluate(spec.right, character)
    if isinstance(spec, Not):
        return not evaluate(spec.spec, character)
    if isinstance(spec, ByClass):
        return character.character_class == spec.character_class
    if isinstance(spec, ByMinimumLevel):
        return not spec.level.is_greater_than(character.level)
    if isinstance(spec, Experienced):
        return character.is_experienced()
    if isinstance(spec, Master):
        return character.is_master()
    if isinstance(spec, ByMinimumCombatPower):
        return character.calculate_combat_power() >= spec.power
    if isinstance(spec, ByNamePattern):
        return spec.regex.search(character.name.value) is not None

    return bool(ensure_specification(spec).matches(character))


# ============================================================================
# FACTORIES
# ============================================================================


def by_class(character_class: Union[CharacterClass, str]) -> ByClass:
    return ByClass(character_class)


def by_minimum_level(level: Union[CharacterLevel, int]) -> ByMinimumLevel:
    return ByMinimumLevel(level)


def experienced() -> Experienced:
    return Experienced()


def masters() -> Master:
    return Master()


def by_minimum_combat_power(power: float) -> ByMinimumCombatPower:
    return ByMinimumCombatPower(power)


def by_name_pattern(pattern: str) -> ByNamePattern:
    return ByNamePattern(pattern)


def powerful_warriors() -> Specification:
    """Guerreiros at or above the experienced threshold."""
    return by_class("Guerreiro") & by_minimum_level(POWERFUL_WARRIOR_MIN_LEVEL)


def expert_mages() -> Specification:
    return by_class("Mago") & experienced()
