"""
Unit tests for AsyncCharacterService.

The adapter must return exactly what the synchronous service returns and
raise exactly what it raises.
"""

import pytest

from roster.modules.character import AsyncCharacterService, masters
from roster.modules.shared.exceptions import CharacterAlreadyExistsError, MaxLevelReachedError
from tests.conftest import names


@pytest.fixture
def async_service(seeded_service) -> AsyncCharacterService:
    return AsyncCharacterService(seeded_service)


@pytest.mark.unit
class TestAsyncCharacterService:
    """Test the awaitable facade."""

    async def test_create_and_find(self, async_service):
        # Act
        await async_service.create_character("Saruman", "Mago", 60)
        found = await async_service.find_character_by_name("saruman")

        # Assert
        assert found.level.value == 60

    async def test_errors_propagate_unchanged(self, async_service):
        with pytest.raises(CharacterAlreadyExistsError):
            await async_service.create_character("Aragorn", "Mago", 10)

        with pytest.raises(MaxLevelReachedError):
            await async_service.level_up_character("Gandalf")

    async def test_queries_match_sync_service(self, async_service, seeded_service):
        assert names(await async_service.get_all_characters()) == names(
            seeded_service.get_all_characters()
        )
        assert names(await async_service.find_characters_by_specification(masters())) == ["Gandalf"]
        assert names(await async_service.find_characters_by_level_range(1, 10)) == [
            "Aragorn",
            "Frodo",
        ]

    async def test_level_up_and_statistics(self, async_service):
        await async_service.level_up_character("Frodo")

        stats = await async_service.get_character_statistics()

        assert stats.lowest_level == 6
        assert stats.total == 5

    async def test_remove_and_preview(self, async_service):
        preview = await async_service.preview_duel("Aragorn", "Gimli")
        removed = await async_service.remove_character("Gimli")

        assert preview.favored == "Gimli"
        assert removed is True

    async def test_delegates_to_wrapped_service(self, mocker):
        service = mocker.MagicMock()
        service.find_viable_opponents.return_value = []
        adapter = AsyncCharacterService(service)

        result = await adapter.find_viable_opponents("Rex")

        assert result == []
        service.find_viable_opponents.assert_called_once_with("Rex")
