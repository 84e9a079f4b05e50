"""
Character Progression Tests
===========================

Covers the leveling state machine (single-step and cascading level-ups,
attribute growth, progress percentages) and the repository-backed
ProgressionService.
"""

import pytest

from heroes.data_models.character import Character
from heroes.services.progression import CharacterProgression, ProgressionService
from heroes.utils.attributes import Attribute
from heroes.utils.progression_exceptions import (
    CharacterNotFoundError, InvalidExperienceError, ProgressionException
)


class TestAddExperience:
    """Single add_experience calls."""

    def setup_method(self):
        self.progression = CharacterProgression()

    def test_new_character_defaults(self, character):
        assert character.level == 1
        assert character.experience == 0
        assert all(character.get_attribute(attribute) == 5 for attribute in Attribute)

    def test_below_threshold_does_not_level(self, character):
        assert self.progression.add_experience(character, 999) is False
        assert character.level == 1
        assert character.experience == 999

    def test_exact_threshold_levels_up(self, character):
        """Reaching exactly the threshold is enough."""
        assert self.progression.add_experience(character, 1000) is True
        assert character.level == 2
        assert character.experience == 1000

    def test_level_up_raises_every_attribute(self, character):
        character.strength = 9
        self.progression.add_experience(character, 1000)
        assert character.intelligence == 6
        assert character.strength == 10
        assert character.agility == 6
        assert character.wisdom == 6

    def test_large_award_advances_one_level_only(self, character):
        """Experience is kept, but only one threshold is crossed per call."""
        assert self.progression.add_experience(character, 5000) is True
        assert character.level == 2
        assert character.experience == 5000

    def test_zero_award_catches_up_pending_level(self, character):
        self.progression.add_experience(character, 5000)
        assert self.progression.add_experience(character, 0) is True
        assert character.level == 3

    def test_zero_award_without_pending_level(self, character):
        assert self.progression.add_experience(character, 0) is False
        assert character.level == 1

    def test_negative_amount_rejected(self, character):
        """Negative awards raise and leave the character untouched."""
        character.experience = 500
        with pytest.raises(InvalidExperienceError) as exc_info:
            self.progression.add_experience(character, -1)
        assert exc_info.value.amount == -1
        assert character.experience == 500
        assert character.level == 1

    def test_negative_amount_is_value_error(self, character):
        with pytest.raises(ValueError):
            self.progression.add_experience(character, -10)

    def test_experience_never_decreases(self, character):
        seen = []
        for amount in (0, 300, 700, 0, 1500, 2):
            self.progression.add_experience(character, amount)
            seen.append(character.experience)
        assert seen == sorted(seen)


class TestCascadingExperience:
    """add_experience_cascading keeps leveling until no threshold is met."""

    def setup_method(self):
        self.progression = CharacterProgression()

    def test_cascade_crosses_several_levels(self, character):
        # 5000 reaches level 5 (4600) but not level 6 (6000)
        assert self.progression.add_experience_cascading(character, 5000) == 4
        assert character.level == 5
        assert character.strength == 9

    def test_cascade_without_level_up(self, character):
        assert self.progression.add_experience_cascading(character, 10) == 0
        assert character.level == 1

    def test_cascade_matches_curve(self, character):
        self.progression.add_experience_cascading(character, 25000)
        assert character.level == self.progression.curve.level_for_experience(25000)

    def test_cascade_rejects_negative(self, character):
        with pytest.raises(InvalidExperienceError):
            self.progression.add_experience_cascading(character, -5)


class TestProgressDisplay:
    """Progress toward the next level."""

    def setup_method(self):
        self.progression = CharacterProgression()

    def test_halfway_through_first_level(self, character):
        character.experience = 500
        assert self.progression.percent_to_next_level(character) == 50

    def test_start_of_level(self):
        character = Character(player_id=1, level=2, experience=1000)
        assert self.progression.percent_to_next_level(character) == 0

    def test_percent_is_floored(self):
        character = Character(player_id=1, level=2, experience=1550)
        # 550 / 1100 = 50%
        assert self.progression.percent_to_next_level(character) == 50
        character.experience = 1010
        assert self.progression.percent_to_next_level(character) == 0

    def test_percent_clamped_when_level_up_pending(self, character):
        character.experience = 5000
        assert self.progression.percent_to_next_level(character) == 100

    def test_experience_to_next_level(self, character):
        character.experience = 250
        assert self.progression.experience_to_next_level(character) == 750

    def test_attribute_bonuses(self, character):
        character.strength = 15
        bonuses = self.progression.attribute_bonuses(character)
        assert bonuses[Attribute.STRENGTH] == 3
        assert bonuses[Attribute.WISDOM] == 1
        assert set(bonuses) == set(Attribute)


class TestProgressionService:
    """Experience awards through a repository."""

    @pytest.mark.asyncio
    async def test_award_levels_up_and_saves(self, repository):
        saved = await repository.save_character(Character(player_id=1, name="Ada"))
        service = ProgressionService(repository)

        result = await service.award_experience(saved.character_id, 1000)

        assert result.leveled_up is True
        assert result.previous_level == 1
        assert result.levels_gained == 1
        assert result.experience_gained == 1000
        stored = await repository.load_character(saved.character_id)
        assert stored.level == 2
        assert stored.experience == 1000

    @pytest.mark.asyncio
    async def test_award_without_cascade_is_single_step(self, repository):
        saved = await repository.save_character(Character(player_id=1))
        service = ProgressionService(repository)

        result = await service.award_experience(saved.character_id, 5000)

        assert result.levels_gained == 1
        assert (await repository.load_character(saved.character_id)).level == 2

    @pytest.mark.asyncio
    async def test_award_with_cascade(self, repository):
        saved = await repository.save_character(Character(player_id=1))
        service = ProgressionService(repository)

        result = await service.award_experience(saved.character_id, 5000, cascade=True)

        assert result.levels_gained == 4
        assert (await repository.load_character(saved.character_id)).level == 5

    @pytest.mark.asyncio
    async def test_unknown_character(self, repository):
        service = ProgressionService(repository)
        with pytest.raises(CharacterNotFoundError) as exc_info:
            await service.award_experience(404, 100)
        assert exc_info.value.character_id == 404
        assert isinstance(exc_info.value, ProgressionException)

    @pytest.mark.asyncio
    async def test_negative_award_does_not_touch_storage(self, repository):
        saved = await repository.save_character(Character(player_id=1, experience=300))
        service = ProgressionService(repository)

        with pytest.raises(InvalidExperienceError):
            await service.award_experience(saved.character_id, -100)

        assert (await repository.load_character(saved.character_id)).experience == 300
