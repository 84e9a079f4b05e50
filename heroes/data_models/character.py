"""
Character data model for the progression engine.

A character is the hero a player levels up. Unlike the other data models it is
mutable: progression updates level, experience and attributes in place.
"""

from dataclasses import dataclass
from typing import Optional

from heroes.config import Config
from heroes.utils.attributes import Attribute


@dataclass
class Character:
    """A player's hero with level, experience and four attributes."""
    player_id: int
    name: str = ""
    character_id: Optional[int] = None
    level: int = Config.STARTING_LEVEL
    experience: int = 0
    intelligence: int = Config.DEFAULT_ATTRIBUTE_VALUE
    strength: int = Config.DEFAULT_ATTRIBUTE_VALUE
    agility: int = Config.DEFAULT_ATTRIBUTE_VALUE
    wisdom: int = Config.DEFAULT_ATTRIBUTE_VALUE
    avatar_path: Optional[str] = None

    def get_attribute(self, attribute: Attribute) -> int:
        return getattr(self, attribute.value)

    def set_attribute(self, attribute: Attribute, value: int):
        setattr(self, attribute.value, value)

    def __repr__(self):
        return (f"<Character(id={self.character_id}, name='{self.name}', level={self.level}, "
                f"exp={self.experience})>")
