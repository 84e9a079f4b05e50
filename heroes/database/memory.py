"""
In-memory repository.

Keeps everything in dictionaries and serialises leaderboard writes with an
asyncio.Lock. Used by tests and by callers that do not need persistence.
"""

import asyncio
from dataclasses import replace
from itertools import count
from typing import Dict, List, Optional

from heroes.constants import LeaderboardConstants
from heroes.data_models.character import Character
from heroes.data_models.leaderboard import ConsolidationOutcome, Leaderboard, LeaderboardEntry
from heroes.database.repository import ProgressionRepository
from heroes.services.leaderboard import LeaderboardRanker
from heroes.utils.progression_exceptions import CharacterNotFoundError, LeaderboardNotFoundError


class InMemoryRepository(ProgressionRepository):
    """Dictionary-backed ProgressionRepository."""

    def __init__(self):
        self._player_ids = count(1)
        self._character_ids = count(1)
        self._leaderboard_ids = count(1)
        self._players: Dict[int, str] = {}
        self._characters: Dict[int, Character] = {}
        self._rankers: Dict[int, LeaderboardRanker] = {}
        self._lock = asyncio.Lock()

    async def create_player(self, username: str) -> int:
        player_id = next(self._player_ids)
        self._players[player_id] = username
        return player_id

    async def resolve_player_name(self, player_id: int) -> Optional[str]:
        return self._players.get(player_id)

    async def load_character(self, character_id: int) -> Optional[Character]:
        character = self._characters.get(character_id)
        # Callers get a copy so unsaved changes never leak into storage
        return replace(character) if character else None

    async def save_character(self, character: Character) -> Character:
        if character.character_id is None:
            character.character_id = next(self._character_ids)
        elif character.character_id not in self._characters:
            raise CharacterNotFoundError(character.character_id)
        self._characters[character.character_id] = replace(character)
        return character

    async def create_leaderboard(self, name: str, category: str = "score", level_id: int = 0) -> Leaderboard:
        leaderboard = Leaderboard(next(self._leaderboard_ids), name, category, level_id)
        self._rankers[leaderboard.leaderboard_id] = LeaderboardRanker(leaderboard)
        return leaderboard

    async def load_leaderboard(self, leaderboard_id: int) -> Optional[Leaderboard]:
        ranker = self._rankers.get(leaderboard_id)
        return ranker.leaderboard if ranker else None

    async def load_leaderboard_entries(self, leaderboard_id: int) -> List[LeaderboardEntry]:
        ranker = self._rankers.get(leaderboard_id)
        return ranker.entries if ranker else []

    async def get_player_best_score(self, leaderboard_id: int, player_id: int) -> int:
        ranker = self._rankers.get(leaderboard_id)
        if ranker is None:
            return LeaderboardConstants.NO_SCORE
        return ranker.player_best_score(player_id)

    async def atomic_consolidate(self, leaderboard_id: int, player_id: int, score: int) -> ConsolidationOutcome:
        async with self._lock:
            ranker = self._rankers.get(leaderboard_id)
            if ranker is None:
                raise LeaderboardNotFoundError(leaderboard_id)
            return ranker.consolidate(player_id, score, self._players.get(player_id))
