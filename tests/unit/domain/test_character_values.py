"""
Unit Tests for Character Value Objects
======================================

Purpose
-------
Test CharacterName, CharacterLevel and CharacterClass without any repository.

Test Coverage
-------------
- Construction and normalization
- Validation errors and their codes
- Case-insensitive equality
- Level bands, comparison and progression
- Class capabilities and abilities

Testing Strategy
----------------
- Unit tests (fast, no storage)
- AAA pattern (Arrange, Act, Assert)
- Test one behavior per test
"""

import pytest

from roster.domain.models import (
    Capability,
    CharacterClass,
    CharacterLevel,
    CharacterName,
    LevelBand,
)
from roster.modules.shared.exceptions import (
    InvalidClassError,
    InvalidLevelError,
    InvalidNameError,
    MaxLevelReachedError,
    ValidationError,
)


# ============================================================================
# CHARACTER NAME TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterName:
    """Test CharacterName value object."""

    def test_name_is_trimmed(self):
        # Arrange & Act
        name = CharacterName("  Aragorn  ")

        # Assert
        assert name.value == "Aragorn"
        assert str(name) == "Aragorn"

    def test_equality_ignores_case(self):
        # Arrange
        upper = CharacterName("Rex")
        lower = CharacterName("rex")

        # Act & Assert
        assert upper.equals(lower)
        assert upper == lower
        assert hash(upper) == hash(lower)

    def test_equality_is_symmetric_and_transitive(self):
        a, b, c = CharacterName("Rex"), CharacterName("REX"), CharacterName("rEx")

        assert a == b and b == a
        assert a == b and b == c and a == c

    def test_key_is_lower_cased(self):
        assert CharacterName("Gandalf").key == "gandalf"

    def test_different_names_are_not_equal(self):
        assert CharacterName("Frodo") != CharacterName("Sam")
        assert CharacterName("Frodo") != "Frodo"

    @pytest.mark.parametrize("raw", ["", "   ", "A", " B "])
    def test_rejects_empty_or_short_names(self, raw):
        # Act & Assert
        with pytest.raises(InvalidNameError) as exc_info:
            CharacterName(raw)

        assert exc_info.value.error_code == "INVALID_NAME"
        assert exc_info.value.field == "name"

    def test_rejects_non_string(self):
        with pytest.raises(InvalidNameError) as exc_info:
            CharacterName(42)  # type: ignore[arg-type]

        assert "must be a string" in str(exc_info.value)

    def test_invalid_name_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            CharacterName("x")

    def test_name_is_immutable(self):
        name = CharacterName("Aragorn")

        with pytest.raises(Exception):  # FrozenInstanceError
            name.value = "Strider"  # type: ignore[misc]

    def test_of_returns_existing_instance(self):
        name = CharacterName("Aragorn")

        assert CharacterName.of(name) is name
        assert CharacterName.of("aragorn") == name


# ============================================================================
# CHARACTER LEVEL TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterLevel:
    """Test CharacterLevel value object."""

    @pytest.mark.parametrize("value", [1, 50, 100])
    def test_accepts_levels_in_range(self, value):
        assert CharacterLevel(value).value == value

    @pytest.mark.parametrize("value", [0, -5, 101, 1000])
    def test_rejects_levels_out_of_range(self, value):
        with pytest.raises(InvalidLevelError) as exc_info:
            CharacterLevel(value)

        assert exc_info.value.error_code == "INVALID_LEVEL"
        assert "between 1 and 100" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["10", 10.0, None, True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(InvalidLevelError):
            CharacterLevel(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "value, band",
        [
            (1, LevelBand.NOVICE),
            (19, LevelBand.NOVICE),
            (20, LevelBand.EXPERIENCED),
            (89, LevelBand.EXPERIENCED),
            (90, LevelBand.MASTER),
            (100, LevelBand.MASTER),
        ],
    )
    def test_classify_band_boundaries(self, value, band):
        assert CharacterLevel(value).classify() is band

    def test_every_level_is_in_exactly_one_band(self):
        for value in range(1, 101):
            level = CharacterLevel(value)
            flags = [level.is_novice(), level.is_experienced(), level.is_master()]
            assert flags.count(True) == 1

    def test_comparisons(self):
        # Arrange
        low, high = CharacterLevel(10), CharacterLevel(35)

        # Act & Assert
        assert high.is_greater_than(low)
        assert not low.is_greater_than(high)
        assert not low.is_greater_than(CharacterLevel(10))
        assert low.equals(CharacterLevel(10))
        assert low < high

    def test_difference_is_absolute(self):
        low, high = CharacterLevel(10), CharacterLevel(35)

        assert low.difference_from(high) == 25
        assert high.difference_from(low) == 25
        assert low.difference_from(low) == 0

    def test_next_returns_new_level(self):
        level = CharacterLevel(41)

        assert level.next() == CharacterLevel(42)
        assert level.value == 41

    def test_next_fails_at_max_level(self):
        with pytest.raises(MaxLevelReachedError) as exc_info:
            CharacterLevel(100).next()

        assert exc_info.value.error_code == "MAX_LEVEL_REACHED"


# ============================================================================
# CHARACTER CLASS TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.domain
class TestCharacterClass:
    """Test CharacterClass value object."""

    @pytest.mark.parametrize(
        "raw, canonical",
        [
            ("Guerreiro", "Guerreiro"),
            ("guerreiro", "Guerreiro"),
            ("WARRIOR", "Guerreiro"),
            ("mage", "Mago"),
            (" Archer ", "Arqueiro"),
            ("paladino", "Paladino"),
        ],
    )
    def test_normalizes_to_canonical_name(self, raw, canonical):
        assert CharacterClass(raw).value == canonical

    def test_equality_ignores_case_and_alias(self):
        assert CharacterClass("mago") == CharacterClass("Mage")
        assert CharacterClass("mago").equals(CharacterClass("MAGO"))

    @pytest.mark.parametrize("raw", ["Bard", "", 3])
    def test_rejects_unknown_classes(self, raw):
        with pytest.raises(InvalidClassError) as exc_info:
            CharacterClass(raw)  # type: ignore[arg-type]

        assert exc_info.value.error_code == "INVALID_CLASS"

    def test_unknown_class_message_lists_valid_classes(self):
        with pytest.raises(InvalidClassError) as exc_info:
            CharacterClass("Bard")

        for canonical in CharacterClass.available():
            assert canonical in str(exc_info.value)

    def test_capabilities(self):
        assert CharacterClass("Mago").capability is Capability.MAGICAL
        assert CharacterClass("Mago").is_magical_class()
        assert not CharacterClass("Mago").is_melee_class()

        for melee in ("Guerreiro", "Arqueiro", "Paladino"):
            assert CharacterClass(melee).is_melee_class()

    def test_every_class_has_abilities(self):
        for canonical in CharacterClass.available():
            abilities = CharacterClass(canonical).abilities()
            assert isinstance(abilities, tuple)
            assert len(abilities) > 0

    def test_melee_multipliers_not_below_magical(self):
        magical = CharacterClass("Mago").combat_multiplier

        for melee in ("Guerreiro", "Arqueiro", "Paladino"):
            assert CharacterClass(melee).combat_multiplier >= magical
