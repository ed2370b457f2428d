"""
Unit tests for InMemoryCharacterRepository.

Tests the repository contract: lookup, upsert, removal, range queries,
specification queries, copy-on-read and thread safety.
"""

import threading

import pytest

from roster.domain.models import Character, CharacterClass, CharacterName
from roster.modules.character import (
    DEFAULT_CHARACTERS,
    CharacterRepository,
    InMemoryCharacterRepository,
    by_minimum_level,
    experienced,
)
from roster.modules.shared.exceptions import InvalidSpecificationError, ValidationError
from tests.conftest import names


@pytest.mark.unit
class TestSeeding:
    """Test default roster seeding."""

    def test_fresh_repository_is_empty(self, repository):
        assert repository.count() == 0
        assert repository.find_all() == []

    def test_with_defaults_loads_demo_roster(self, seeded_repository):
        assert seeded_repository.count() == len(DEFAULT_CHARACTERS)
        assert names(seeded_repository.find_all()) == [
            "Aragorn",
            "Gandalf",
            "Legolas",
            "Gimli",
            "Frodo",
        ]

    def test_seed_follows_config_when_unspecified(self, mocker):
        mocker.patch("roster.modules.character.memory_repository.Config.ROSTER_SEED_DEFAULTS", True)

        repository = InMemoryCharacterRepository()

        assert repository.count() == len(DEFAULT_CHARACTERS)

    def test_is_a_character_repository(self, repository):
        assert isinstance(repository, CharacterRepository)


@pytest.mark.unit
class TestStoragePrimitives:
    """Test save / find / remove / exists / count."""

    def test_save_and_find_by_name_any_casing(self, repository, aragorn):
        # Act
        saved = repository.save(aragorn)

        # Assert
        assert saved is aragorn
        assert repository.find_by_name("ARAGORN") == aragorn
        assert repository.find_by_name(CharacterName("aragorn")).level.value == 10

    def test_find_by_name_missing_returns_none(self, repository):
        assert repository.find_by_name("Nobody") is None

    def test_save_is_upsert_keeping_position(self, repository, aragorn, gandalf):
        # Arrange
        repository.save(aragorn)
        repository.save(gandalf)

        # Act
        repository.save(Character("aragorn", "Paladino", 50))

        # Assert
        assert repository.count() == 2
        assert names(repository.find_all()) == ["aragorn", "Gandalf"]
        assert repository.find_by_name("Aragorn").character_class.value == "Paladino"

    def test_remove(self, repository, aragorn):
        repository.save(aragorn)

        assert repository.remove("aragorn") is True
        assert repository.remove("aragorn") is False
        assert repository.exists("Aragorn") is False

    def test_exists_and_count(self, repository, aragorn, gandalf):
        repository.save(aragorn)
        repository.save(gandalf)

        assert repository.exists("gandalf")
        assert not repository.exists("Saruman")
        assert repository.count() == 2

    def test_save_rejects_non_character(self, repository):
        with pytest.raises(ValidationError) as exc_info:
            repository.save({"name": "Rex", "class": "Mago", "level": 5})  # type: ignore[arg-type]

        assert exc_info.value.field == "character"

    def test_debug_state(self, seeded_repository):
        state = seeded_repository.debug_state()

        assert state["total_characters"] == 5
        assert state["characters"][0] == "aragorn"


@pytest.mark.unit
class TestCopyOnRead:
    """Returned objects never alias repository state."""

    def test_mutating_returned_character_does_not_change_store(self, repository, aragorn):
        repository.save(aragorn)

        found = repository.find_by_name("Aragorn")
        found.level_up()

        assert repository.find_by_name("Aragorn").level.value == 10

    def test_mutating_saved_character_after_save_does_not_change_store(self, repository, aragorn):
        repository.save(aragorn)

        aragorn.level_up()

        assert repository.find_by_name("Aragorn").level.value == 10

    def test_find_all_returns_new_list(self, seeded_repository):
        first = seeded_repository.find_all()
        first.clear()

        assert seeded_repository.count() == 5
        assert len(seeded_repository.find_all()) == 5


@pytest.mark.unit
class TestQueries:
    """Test class, range, pattern and specification queries."""

    def test_find_by_class(self, seeded_repository):
        assert names(seeded_repository.find_by_class("Guerreiro")) == ["Aragorn", "Gimli"]
        assert names(seeded_repository.find_by_class(CharacterClass("archer"))) == [
            "Legolas",
            "Frodo",
        ]

    def test_find_by_level_range_is_inclusive(self, seeded_repository):
        assert names(seeded_repository.find_by_level_range(10, 25)) == [
            "Aragorn",
            "Legolas",
            "Gimli",
        ]

    def test_find_by_level_range_empty_repository(self, repository):
        assert repository.find_by_level_range(10, 30) == []

    def test_find_by_level_range_inverted_fails(self, seeded_repository):
        with pytest.raises(ValidationError) as exc_info:
            seeded_repository.find_by_level_range(30, 10)

        assert exc_info.value.error_code == "VALIDATION_LEVEL_RANGE"

    def test_find_by_specification_matches_filter(self, seeded_repository):
        spec = by_minimum_level(20) & experienced()

        expected = [c for c in seeded_repository.find_all() if spec.is_satisfied_by(c)]

        assert seeded_repository.find_by_specification(spec) == expected
        assert names(expected) == ["Legolas", "Gimli"]

    def test_find_by_specification_is_idempotent(self, seeded_repository):
        spec = ~experienced()

        first = seeded_repository.find_by_specification(spec)
        second = seeded_repository.find_by_specification(spec)

        assert names(first) == names(second)

    def test_find_by_specification_rejects_non_specification(self, seeded_repository):
        with pytest.raises(InvalidSpecificationError):
            seeded_repository.find_by_specification(None)  # type: ignore[arg-type]

    def test_find_by_name_pattern(self, seeded_repository):
        assert names(seeded_repository.find_by_name_pattern("^g")) == ["Gandalf", "Gimli"]

    def test_find_experienced(self, seeded_repository):
        assert names(seeded_repository.find_experienced()) == ["Legolas", "Gimli"]

    def test_find_viable_opponents_excludes_self_and_wide_gaps(self, seeded_repository):
        aragorn = seeded_repository.find_by_name("Aragorn")

        opponents = seeded_repository.find_viable_opponents(aragorn)

        assert names(opponents) == ["Legolas", "Gimli", "Frodo"]


@pytest.mark.unit
class TestConcurrency:
    """Mutations from several threads are serialized."""

    def test_concurrent_saves_keep_every_character(self, repository):
        def worker(offset):
            for index in range(50):
                repository.save(Character(f"Hero{offset}_{index}", "Mago", 1 + index))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert repository.count() == 200
