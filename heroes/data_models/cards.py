"""
Card and ability data models.

Effect types and rarities arrive as free-form strings from content storage. They
are classified into closed enums here; anything unrecognised becomes
UNCLASSIFIED and keeps the raw string so it can be reported.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class EffectType(Enum):
    ATTACK = "attack"
    HEALING = "healing"
    BUFF = "buff"
    DEBUFF = "debuff"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "EffectClassification":
        """Case-insensitive lookup of a raw effect type string."""
        effect_type = _EFFECT_ALIASES.get((raw or "").lower(), cls.UNCLASSIFIED)
        return EffectClassification(effect_type, raw or "")


_EFFECT_ALIASES = {
    "damage": EffectType.ATTACK,
    "attack": EffectType.ATTACK,
    "heal": EffectType.HEALING,
    "healing": EffectType.HEALING,
    "buff": EffectType.BUFF,
    "debuff": EffectType.DEBUFF,
}


@dataclass(frozen=True)
class EffectClassification:
    """Result of classifying a raw effect type string."""
    effect_type: EffectType
    raw: str

    @property
    def is_recognized(self) -> bool:
        return self.effect_type is not EffectType.UNCLASSIFIED


class Rarity(Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "Rarity":
        try:
            rarity = cls((raw or "").lower())
        except ValueError:
            return cls.UNCLASSIFIED
        return rarity

    @property
    def is_rare(self) -> bool:
        return self in (Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)

    @property
    def rarity_value(self) -> int:
        """Sort order of the rarity: 1 (common) to 5 (legendary), 0 when unknown."""
        return _RARITY_VALUES.get(self, 0)


_RARITY_VALUES = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 2,
    Rarity.RARE: 3,
    Rarity.EPIC: 4,
    Rarity.LEGENDARY: 5,
}

_EFFECT_LABELS = {
    EffectType.ATTACK: "Damage",
    EffectType.HEALING: "Healing",
    EffectType.BUFF: "Buff",
    EffectType.DEBUFF: "Debuff",
}


@dataclass(frozen=True)
class Ability:
    """Single ability printed on a card."""
    name: str
    effect_type: str
    effect_value: int
    ability_id: Optional[int] = None
    card_id: Optional[int] = None
    description: str = ""

    @property
    def classification(self) -> EffectClassification:
        return EffectType.classify(self.effect_type)

    @property
    def formatted_effect(self) -> str:
        """Display label and value, e.g. "Damage: 10". Unknown types show the raw string."""
        classification = self.classification
        label = _EFFECT_LABELS.get(classification.effect_type, classification.raw)
        return f"{label}: {self.effect_value}"


@dataclass(frozen=True)
class Card:
    """Collectible card with its abilities."""
    name: str
    rarity: str = "common"
    abilities: Tuple[Ability, ...] = field(default_factory=tuple)
    card_id: Optional[int] = None
    category_id: Optional[int] = None
    description: str = ""
    image_path: Optional[str] = None

    @property
    def rarity_class(self) -> Rarity:
        return Rarity.classify(self.rarity)

    @property
    def is_rare(self) -> bool:
        return self.rarity_class.is_rare

    @property
    def rarity_value(self) -> int:
        return self.rarity_class.rarity_value
