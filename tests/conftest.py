"""
Pytest Configuration and Fixtures for Roster Tests
==================================================

Purpose
-------
Centralized test fixtures and configuration for the Roster test suite.
Provides reusable fixtures for repositories, services, domain models and an
in-memory SQLite engine.

Responsibilities
----------------
- Test environment configuration
- Fresh repository and service per test
- Domain model factories for test data
- SQLite engine for SQL repository integration tests

Architecture Notes
------------------
- Unit tests use the in-memory repository or mocks (fast, isolated)
- Integration tests use a private in-memory SQLite database per test
- Every fixture is function scoped, so each test starts from a clean slate
"""

from __future__ import annotations

import os
from typing import Generator, Iterable, List

import pytest
from sqlalchemy.engine import Engine

from roster.core.config import Config
from roster.domain.models import Character
from roster.modules.character import (
    CharacterService,
    InMemoryCharacterRepository,
    SqlCharacterRepository,
    create_roster_engine,
)

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest environment."""
    os.environ["ENVIRONMENT"] = "testing"
    os.environ["LOG_LEVEL"] = "DEBUG"
    os.environ["ROSTER_SEED_DEFAULTS"] = "false"
    Config.load()


# ============================================================================
# DOMAIN MODEL FIXTURES
# ============================================================================


@pytest.fixture
def aragorn() -> Character:
    return Character("Aragorn", "Guerreiro", 10)


@pytest.fixture
def gandalf() -> Character:
    return Character("Gandalf", "Mago", 100)


@pytest.fixture
def legolas() -> Character:
    return Character("Legolas", "Arqueiro", 25)


# ============================================================================
# REPOSITORY / SERVICE FIXTURES (Unit Tests)
# ============================================================================


@pytest.fixture
def repository() -> InMemoryCharacterRepository:
    """Empty in-memory repository."""
    return InMemoryCharacterRepository(seed_defaults=False)


@pytest.fixture
def seeded_repository() -> InMemoryCharacterRepository:
    """In-memory repository holding DEFAULT_CHARACTERS."""
    return InMemoryCharacterRepository.with_defaults()


@pytest.fixture
def service(repository) -> CharacterService:
    return CharacterService(repository)


@pytest.fixture
def seeded_service(seeded_repository) -> CharacterService:
    return CharacterService(seeded_repository)


# ============================================================================
# DATABASE FIXTURES (Integration Tests)
# ============================================================================


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """
    Private in-memory SQLite database.

    Scope: function (clean database per test)
    """
    engine = create_roster_engine("sqlite:///:memory:", echo=False)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_repository(sqlite_engine) -> SqlCharacterRepository:
    return SqlCharacterRepository(sqlite_engine)


# ============================================================================
# UTILITY FUNCTIONS
# ============================================================================


def names(characters: Iterable[Character]) -> List[str]:
    """Character names in iteration order."""
    return [character.name.value for character in characters]


def assert_domain_event_emitted(domain_model, event_name: str) -> bool:
    """
    Assert that a domain model emitted a specific event.

    Usage:
        character.level_up()
        assert assert_domain_event_emitted(character, "character.leveled_up")
    """
    events = domain_model.get_pending_events()
    return any(event.event_name == event_name for event in events)


def get_domain_event_payload(domain_model, event_name: str) -> dict | None:
    """
    Get the payload of a specific domain event.

    Usage:
        character.level_up()
        payload = get_domain_event_payload(character, "character.leveled_up")
        assert payload["new_level"] == 11
    """
    events = domain_model.get_pending_events()
    for event in events:
        if event.event_name == event_name:
            return event.payload
    return None
