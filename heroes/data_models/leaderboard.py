"""
Leaderboard data models.

Provides immutable data transfer objects for leaderboard entries, leaderboard
metadata and paginated views.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from heroes.constants import DisplayConstants
from heroes.data_models.activities import format_duration


class LeaderboardCategory(Enum):
    SCORE = "score"
    TIME = "time"
    CARDS_COLLECTED = "cards_collected"
    STARS = "stars"
    COMPLETED_LEVELS = "completed_levels"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def classify(cls, raw: Optional[str]) -> "LeaderboardCategory":
        try:
            category = cls((raw or "").lower())
        except ValueError:
            return cls.UNCLASSIFIED
        return category

    def format_score(self, score: int) -> str:
        """Format a score for display according to the category."""
        if self is LeaderboardCategory.TIME:
            return format_duration(score)
        if self is LeaderboardCategory.STARS:
            return f"{score} {DisplayConstants.STAR_SYMBOL}"
        return str(score)


class ConsolidationOutcome(Enum):
    """What a best-score submission did to the player's entry."""
    INSERTED = "inserted"
    UPDATED = "updated"
    UNCHANGED = "unchanged"

    @property
    def is_personal_best(self) -> bool:
        return self is not ConsolidationOutcome.UNCHANGED


_CATEGORY_DESCRIPTIONS = {
    LeaderboardCategory.SCORE: "Highest score",
    LeaderboardCategory.TIME: "Fastest time",
    LeaderboardCategory.CARDS_COLLECTED: "Cards collected",
    LeaderboardCategory.STARS: "Stars earned",
    LeaderboardCategory.COMPLETED_LEVELS: "Levels completed",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row."""
    player_id: int
    score: int
    date: Optional[datetime] = field(default_factory=_utcnow)
    player_name: Optional[str] = None
    entry_id: Optional[int] = None
    leaderboard_id: Optional[int] = None

    def formatted_date(self) -> str:
        if self.date is None:
            return ""
        return self.date.strftime(DisplayConstants.ENTRY_DATE_FORMAT)


@dataclass(frozen=True)
class Leaderboard:
    """Leaderboard metadata. Level id 0 marks a global leaderboard."""
    leaderboard_id: int
    name: str = ""
    category: str = LeaderboardCategory.SCORE.value
    level_id: int = 0

    @property
    def category_class(self) -> LeaderboardCategory:
        return LeaderboardCategory.classify(self.category)

    @property
    def category_description(self) -> str:
        """Human readable category, falling back to the raw category string."""
        return _CATEGORY_DESCRIPTIONS.get(self.category_class, self.category)

    @property
    def is_global(self) -> bool:
        return self.level_id == 0


@dataclass(frozen=True)
class RankedEntry:
    """Entry paired with its competition rank."""
    rank: int
    entry: LeaderboardEntry


@dataclass(frozen=True)
class LeaderboardPage:
    """Paginated leaderboard data."""
    entries: List[RankedEntry]
    current_page: int
    total_pages: int
    total_entries: int
    leaderboard_id: int
