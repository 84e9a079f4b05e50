"""
Ability effect resolution.

An ability's effective value is its printed value plus the bonus of the attribute
that governs its effect type: strength for attacks, wisdom for healing and
intelligence for buffs and debuffs. Unrecognised effect types resolve to the
printed value and are logged so typos in content can be found.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from heroes.data_models.cards import Ability, Card, EffectClassification, EffectType
from heroes.data_models.character import Character
from heroes.utils.attributes import Attribute, AttributeBonusResolver

logger = logging.getLogger(__name__)

_GOVERNING_ATTRIBUTES = {
    EffectType.ATTACK: Attribute.STRENGTH,
    EffectType.HEALING: Attribute.WISDOM,
    EffectType.BUFF: Attribute.INTELLIGENCE,
    EffectType.DEBUFF: Attribute.INTELLIGENCE,
}


@dataclass(frozen=True)
class ResolvedEffect:
    """Ability together with the value it has for a specific character."""
    ability: Ability
    effect_type: EffectType
    bonus: int
    effective_value: int


class AbilityEffectResolver:
    """Classifies abilities and computes their effective values."""

    def classify(self, ability: Ability) -> EffectClassification:
        classification = ability.classification
        if not classification.is_recognized:
            logger.warning(
                f"Ability '{ability.name}' (id={ability.ability_id}) has unclassified "
                f"effect type '{classification.raw}', applying no bonus"
            )
        return classification

    def is_attack(self, ability: Ability) -> bool:
        return ability.classification.effect_type is EffectType.ATTACK

    def is_healing(self, ability: Ability) -> bool:
        return ability.classification.effect_type is EffectType.HEALING

    def is_buff(self, ability: Ability) -> bool:
        return ability.classification.effect_type is EffectType.BUFF

    def is_debuff(self, ability: Ability) -> bool:
        return ability.classification.effect_type is EffectType.DEBUFF

    @staticmethod
    def governing_attribute(effect_type: EffectType) -> Optional[Attribute]:
        return _GOVERNING_ATTRIBUTES.get(effect_type)

    def resolve(self, ability: Ability, character: Character) -> ResolvedEffect:
        effect_type = self.classify(ability).effect_type
        attribute = self.governing_attribute(effect_type)
        bonus = AttributeBonusResolver.bonus_for(character, attribute) if attribute else 0
        return ResolvedEffect(ability, effect_type, bonus, ability.effect_value + bonus)

    def effective_value(self, ability: Ability, character: Character) -> int:
        """
        Compute the value of an ability when used by a character.

        Args:
            ability: Ability to resolve
            character: Character whose attributes provide the bonus

        Returns:
            Printed effect value plus the governing attribute bonus
        """
        return self.resolve(ability, character).effective_value

    def resolve_card(self, card: Card, character: Character) -> List[ResolvedEffect]:
        return [self.resolve(ability, character) for ability in card.abilities]
