"""
Repository contract consumed by the service layer.

The engine itself never performs I/O; services read and write characters and
leaderboard entries through this interface. Implementations must make
atomic_consolidate a single step: reading the current best and conditionally
writing the new score may not be split into two independent calls, otherwise two
concurrent sessions for the same player can lose an update.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from heroes.data_models.character import Character
from heroes.data_models.leaderboard import ConsolidationOutcome, Leaderboard, LeaderboardEntry


class ProgressionRepository(ABC):
    """Storage contract for characters, players and leaderboards."""

    @abstractmethod
    async def create_player(self, username: str) -> int:
        """Register a player and return the new player id."""

    @abstractmethod
    async def resolve_player_name(self, player_id: int) -> Optional[str]:
        """Display name of a player, or None when unknown."""

    @abstractmethod
    async def load_character(self, character_id: int) -> Optional[Character]:
        """Load a character, or None when it does not exist."""

    @abstractmethod
    async def save_character(self, character: Character) -> Character:
        """
        Insert (no character_id yet) or update a character.

        Raises:
            CharacterNotFoundError: updating an id that does not exist
            DatabaseError: storage failure
        """

    @abstractmethod
    async def create_leaderboard(self, name: str, category: str = "score", level_id: int = 0) -> Leaderboard:
        """Create a leaderboard and return its metadata."""

    @abstractmethod
    async def load_leaderboard(self, leaderboard_id: int) -> Optional[Leaderboard]:
        """Load leaderboard metadata, or None when it does not exist."""

    @abstractmethod
    async def load_leaderboard_entries(self, leaderboard_id: int) -> List[LeaderboardEntry]:
        """All entries of a leaderboard, highest score first, earliest first among ties."""

    @abstractmethod
    async def get_player_best_score(self, leaderboard_id: int, player_id: int) -> int:
        """Player's best score, or LeaderboardConstants.NO_SCORE."""

    @abstractmethod
    async def atomic_consolidate(self, leaderboard_id: int, player_id: int, score: int) -> ConsolidationOutcome:
        """
        Insert the player's first entry or raise their best score, atomically.

        A score that does not beat the recorded best leaves storage untouched.

        Raises:
            DatabaseError: storage failure (safe to retry)
        """
