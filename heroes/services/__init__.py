"""
Services package for the Knowledge Heroes engine.
"""

from .base import BaseService
from .abilities import AbilityEffectResolver
from .activities import ActivityService
from .leaderboard import LeaderboardRanker, LeaderboardService
from .progression import CharacterProgression, ProgressionService

__all__ = [
    'BaseService',
    'AbilityEffectResolver',
    'ActivityService',
    'LeaderboardRanker',
    'LeaderboardService',
    'CharacterProgression',
    'ProgressionService',
]
