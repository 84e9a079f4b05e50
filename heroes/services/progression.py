"""
Character progression for the Knowledge Heroes engine.

CharacterProgression is the pure leveling state machine: it mutates a Character
handed to it and never touches storage. ProgressionService wraps it with
repository access so that experience awards are loaded, applied and saved in one
call.

A single add_experience call advances at most one level, even when the amount
would cross several thresholds. Callers that need to cross several levels at once
use add_experience_cascading, which keeps leveling until no threshold is met.
"""

from dataclasses import dataclass
from typing import Dict
import logging

from heroes.config import Config
from heroes.data_models.character import Character
from heroes.services.base import BaseService
from heroes.utils.attributes import Attribute, AttributeBonusResolver
from heroes.utils.experience import ExperienceCurve
from heroes.utils.progression_exceptions import CharacterNotFoundError, InvalidExperienceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressionResult:
    """Outcome of an experience award."""
    character: Character
    previous_level: int
    experience_gained: int

    @property
    def levels_gained(self) -> int:
        return self.character.level - self.previous_level

    @property
    def leveled_up(self) -> bool:
        return self.levels_gained > 0


class CharacterProgression:
    """Leveling rules: experience thresholds and attribute growth."""

    def __init__(self, curve: ExperienceCurve = None):
        self.curve = curve or ExperienceCurve()

    def required_experience(self, level: int) -> int:
        return self.curve.required_experience(level)

    def add_experience(self, character: Character, amount: int) -> bool:
        """
        Add experience and perform at most one level-up.

        Args:
            character: Character to update in place
            amount: Experience to add (must be non-negative)

        Returns:
            True if the character leveled up
        """
        if amount < 0:
            raise InvalidExperienceError(amount)

        character.experience += amount
        if character.experience >= self.required_experience(character.level + 1):
            self.level_up(character)
            return True
        return False

    def add_experience_cascading(self, character: Character, amount: int) -> int:
        """
        Add experience and keep leveling until no threshold is met.

        Returns:
            Number of levels gained
        """
        levels_gained = 0
        leveled_up = self.add_experience(character, amount)
        while leveled_up:
            levels_gained += 1
            leveled_up = self.add_experience(character, 0)
        return levels_gained

    def level_up(self, character: Character):
        """Increase level by one and every attribute by the per-level gain."""
        character.level += 1
        for attribute in Attribute:
            character.set_attribute(
                attribute,
                character.get_attribute(attribute) + Config.ATTRIBUTE_GAIN_PER_LEVEL
            )
        logger.info(f"Character {character.character_id} ({character.name}) reached level {character.level}")

    def percent_to_next_level(self, character: Character) -> int:
        """Progress through the current level as a whole percentage (0-100)."""
        current_threshold = self.required_experience(character.level)
        level_span = self.required_experience(character.level + 1) - current_threshold
        percent = 100 * (character.experience - current_threshold) // level_span
        return min(max(percent, 0), 100)

    def experience_to_next_level(self, character: Character) -> int:
        """Experience still missing before the next level-up."""
        remaining = self.required_experience(character.level + 1) - character.experience
        return max(remaining, 0)

    def attribute_bonuses(self, character: Character) -> Dict[Attribute, int]:
        return {
            attribute: AttributeBonusResolver.bonus_for(character, attribute)
            for attribute in Attribute
        }


class ProgressionService(BaseService):
    """Service for awarding experience to stored characters."""

    def __init__(self, repository, progression: CharacterProgression = None):
        super().__init__(repository)
        self.progression = progression or CharacterProgression()

    async def award_experience(self, character_id: int, amount: int, cascade: bool = False) -> ProgressionResult:
        """
        Load a character, add experience and save the result.

        Args:
            character_id: Character to update
            amount: Experience to add (must be non-negative)
            cascade: Level up repeatedly instead of at most once

        Returns:
            ProgressionResult with the saved character
        """
        if amount < 0:
            raise InvalidExperienceError(amount)

        character = await self.repository.load_character(character_id)
        if character is None:
            raise CharacterNotFoundError(character_id)

        previous_level = character.level
        if cascade:
            self.progression.add_experience_cascading(character, amount)
        else:
            self.progression.add_experience(character, amount)

        saved = await self.execute_with_retry(
            lambda: self.repository.save_character(character),
            operation="character save"
        )
        return ProgressionResult(saved, previous_level, amount)
