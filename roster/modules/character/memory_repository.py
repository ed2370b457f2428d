"""
In-memory character repository.

Purpose
-------
Reference CharacterRepository backend: a dict keyed by lower-cased name,
guarded by a re-entrant lock. Used by default and in tests.

Design Notes
------------
- Python dicts keep insertion order, and overwriting a key keeps its slot, so
  an upsert never moves a character to the end.
- Stored characters are snapshots taken at ``save`` time; every read returns
  fresh snapshots, so no caller ever holds a reference into the store.
- A fresh repository is empty. The demo roster is opt-in through
  ``with_defaults()``, ``seed_defaults()`` or ROSTER_SEED_DEFAULTS.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from roster.core.config import Config
from roster.core.logging import get_logger
from roster.domain.models.character import Character, NameLike
from roster.modules.character.repository import CharacterRepository

if TYPE_CHECKING:
    from logging import Logger


DEFAULT_CHARACTERS: Tuple[Mapping[str, Any], ...] = (
    {"name": "Aragorn", "class": "Guerreiro", "level": 10},
    {"name": "Gandalf", "class": "Mago", "level": 100},
    {"name": "Legolas", "class": "Arqueiro", "level": 25},
    {"name": "Gimli", "class": "Guerreiro", "level": 20},
    {"name": "Frodo", "class": "Arqueiro", "level": 5},
)


class InMemoryCharacterRepository(CharacterRepository):
    """
    Thread-safe in-memory character store.

    Args:
        seed_defaults: Load DEFAULT_CHARACTERS on construction. None defers
            to Config.ROSTER_SEED_DEFAULTS.
        logger: Optional logger; defaults to this module's logger
    """

    def __init__(
        self,
        seed_defaults: Optional[bool] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._characters: Dict[str, Character] = {}
        self._lock = threading.RLock()
        self.log = logger or get_logger(__name__)

        if seed_defaults is None:
            seed_defaults = Config.ROSTER_SEED_DEFAULTS
        if seed_defaults:
            self.seed_defaults()

    @classmethod
    def with_defaults(cls, logger: Optional[Logger] = None) -> InMemoryCharacterRepository:
        """Repository pre-loaded with the demo roster."""
        return cls(seed_defaults=True, logger=logger)

    def seed_defaults(self) -> int:
        """
        Upsert DEFAULT_CHARACTERS.

        Returns:
            Number of default characters written
        """
        characters = [Character.from_plain_object(data) for data in DEFAULT_CHARACTERS]
        with self._lock:
            for character in characters:
                self._characters[character.name.key] = character.snapshot()

        self.log.debug(
            "Seeded default characters",
            extra={"count": len(characters)},
        )
        return len(characters)

    # ========================================================================
    # STORAGE PRIMITIVES
    # ========================================================================

    def find_by_name(self, name: NameLike) -> Optional[Character]:
        key = self._key(name)
        with self._lock:
            stored = self._characters.get(key)
            found = stored.snapshot() if stored is not None else None

        self.log.debug(
            "InMemoryCharacterRepository.find_by_name",
            extra={"key": key, "found": found is not None},
        )
        return found

    def find_all(self) -> List[Character]:
        with self._lock:
            return [character.snapshot() for character in self._characters.values()]

    def save(self, character: Character) -> Character:
        self._check_character(character)
        key = character.name.key

        with self._lock:
            created = key not in self._characters
            self._characters[key] = character.snapshot()

        self.log.debug(
            "InMemoryCharacterRepository.save",
            extra={"key": key, "inserted": created, "level": character.level.value},
        )
        return character

    def remove(self, name: NameLike) -> bool:
        key = self._key(name)
        with self._lock:
            removed = self._characters.pop(key, None) is not None

        self.log.debug(
            "InMemoryCharacterRepository.remove",
            extra={"key": key, "removed": removed},
        )
        return removed

    def exists(self, name: NameLike) -> bool:
        key = self._key(name)
        with self._lock:
            return key in self._characters

    def count(self) -> int:
        with self._lock:
            return len(self._characters)

    # ========================================================================
    # DIAGNOSTICS
    # ========================================================================

    def debug_state(self) -> Dict[str, Any]:
        """Keys and size of the store, for troubleshooting only."""
        with self._lock:
            return {
                "total_characters": len(self._characters),
                "characters": list(self._characters),
            }
