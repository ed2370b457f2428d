"""
Async adapter for the character service.

Lets event-loop based hosts await roster operations. Every coroutine calls the
synchronous CharacterService directly and returns; there are no suspension
points, so results and exceptions are exactly those of the sync service.

Usage
-----
>>> service = AsyncCharacterService(CharacterService(InMemoryCharacterRepository()))
>>> await service.create_character("Rex", "Guerreiro", 95)
"""

from __future__ import annotations

from typing import List

from roster.domain.models.character import Character, ClassLike, LevelLike, NameLike
from roster.modules.character.service import (
    CharacterService,
    CharacterStatistics,
    DuelPreview,
)
from roster.modules.character.specification import Specification


class AsyncCharacterService:
    """Awaitable facade over a CharacterService."""

    def __init__(self, service: CharacterService) -> None:
        self.service = service

    async def find_character_by_name(self, name: NameLike) -> Character:
        return self.service.find_character_by_name(name)

    async def get_all_characters(self) -> List[Character]:
        return self.service.get_all_characters()

    async def find_characters_by_class(self, character_class: ClassLike) -> List[Character]:
        return self.service.find_characters_by_class(character_class)

    async def find_characters_by_level_range(
        self,
        min_level: LevelLike,
        max_level: LevelLike,
    ) -> List[Character]:
        return self.service.find_characters_by_level_range(min_level, max_level)

    async def find_characters_by_specification(
        self,
        specification: Specification,
    ) -> List[Character]:
        return self.service.find_characters_by_specification(specification)

    async def find_experienced_characters(self) -> List[Character]:
        return self.service.find_experienced_characters()

    async def find_master_characters(self) -> List[Character]:
        return self.service.find_master_characters()

    async def find_powerful_warriors(self) -> List[Character]:
        return self.service.find_powerful_warriors()

    async def find_expert_mages(self) -> List[Character]:
        return self.service.find_expert_mages()

    async def find_viable_opponents(self, name: NameLike) -> List[Character]:
        return self.service.find_viable_opponents(name)

    async def create_character(
        self,
        name: NameLike,
        character_class: ClassLike,
        level: LevelLike,
    ) -> Character:
        return self.service.create_character(name, character_class, level)

    async def remove_character(self, name: NameLike) -> bool:
        return self.service.remove_character(name)

    async def level_up_character(self, name: NameLike) -> Character:
        return self.service.level_up_character(name)

    async def get_character_statistics(self) -> CharacterStatistics:
        return self.service.get_character_statistics()

    async def preview_duel(self, challenger: NameLike, opponent: NameLike) -> DuelPreview:
        return self.service.preview_duel(challenger, opponent)
