from enum import Enum
from typing import TYPE_CHECKING

from heroes.constants import AttributeConstants

if TYPE_CHECKING:
    from heroes.data_models.character import Character

class Attribute(Enum):
    INTELLIGENCE = "intelligence"
    STRENGTH = "strength"
    AGILITY = "agility"
    WISDOM = "wisdom"

class AttributeBonusResolver:
    """Maps raw attribute values to discrete bonuses"""

    @staticmethod
    def bonus(value: int) -> int:
        """Every full 5 points of an attribute grant +1"""
        return value // AttributeConstants.BONUS_DIVISOR

    @staticmethod
    def bonus_for(character: "Character", attribute: Attribute) -> int:
        return AttributeBonusResolver.bonus(character.get_attribute(attribute))
