"""
Leaderboard ranking and best-score consolidation.

LeaderboardRanker keeps the entries of one leaderboard ordered by score,
highest first. Ties are broken by arrival order: an entry that reached a score
earlier stays ahead of one that reached it later. Ranks are competition ranks,
so tied players share a rank and the next rank skips accordingly
(scores 100, 90, 90, 80 rank 1, 2, 2, 4).

LeaderboardService loads rankers through the repository and submits scores with
the repository's atomic compare-and-write so that a player's recorded best is
never lowered, even when two sessions submit at the same time.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from itertools import count
from typing import Dict, Iterable, List, Optional
import logging
import math

from heroes.config import Config
from heroes.constants import LeaderboardConstants
from heroes.data_models.leaderboard import (
    ConsolidationOutcome, Leaderboard, LeaderboardEntry, LeaderboardPage, RankedEntry
)
from heroes.services.base import BaseService
from heroes.utils.progression_exceptions import InvalidScoreError, LeaderboardNotFoundError

logger = logging.getLogger(__name__)


def validate_score(score: int):
    """Reject scores that can never be stored (leaderboard scores are non-negative)."""
    if score < 0:
        raise InvalidScoreError(score, "Scores cannot be negative")


@dataclass
class _Slot:
    arrival: int
    entry: LeaderboardEntry


class LeaderboardRanker:
    """Ordered, in-memory view of one leaderboard's entries."""

    def __init__(self, leaderboard: Leaderboard, entries: Iterable[LeaderboardEntry] = ()):
        self.leaderboard = leaderboard
        self._arrivals = count()
        self._slots: List[_Slot] = []
        for entry in entries:
            self._slots.append(_Slot(next(self._arrivals), self._attach(entry)))
        self._sort()

    def _attach(self, entry: LeaderboardEntry) -> LeaderboardEntry:
        if entry.leaderboard_id == self.leaderboard.leaderboard_id:
            return entry
        return replace(entry, leaderboard_id=self.leaderboard.leaderboard_id)

    def _sort(self):
        # Stable sort; arrival order is part of the key so ties never depend on it
        self._slots.sort(key=lambda slot: (-slot.entry.score, slot.arrival))

    def _best_slot(self, player_id: int) -> Optional[_Slot]:
        # Slots are sorted, so the first match is the player's best entry
        return next((slot for slot in self._slots if slot.entry.player_id == player_id), None)

    @property
    def entries(self) -> List[LeaderboardEntry]:
        return [slot.entry for slot in self._slots]

    @property
    def entry_count(self) -> int:
        return len(self._slots)

    @property
    def top_score(self) -> int:
        return self._slots[0].entry.score if self._slots else 0

    def add_entry(self, entry: LeaderboardEntry):
        """Append an entry and restore score order."""
        self._slots.append(_Slot(next(self._arrivals), self._attach(entry)))
        self._sort()

    def remove_entry(self, entry_id: int) -> bool:
        remaining = [slot for slot in self._slots if slot.entry.entry_id != entry_id]
        removed = len(remaining) != len(self._slots)
        self._slots = remaining
        return removed

    def consolidate(self, player_id: int, score: int, player_name: Optional[str] = None) -> ConsolidationOutcome:
        """
        Record a score keeping only the player's best.

        Args:
            player_id: Player submitting the score
            score: Newly achieved score
            player_name: Optional display name to cache on the entry

        Returns:
            INSERTED for a first entry, UPDATED when the score beats the recorded
            best, UNCHANGED when it does not (recorded scores never go down)
        """
        validate_score(score)
        best = self._best_slot(player_id)

        if best is None:
            self.add_entry(LeaderboardEntry(player_id=player_id, score=score, player_name=player_name))
            outcome = ConsolidationOutcome.INSERTED
        elif best.entry.score < score:
            best.entry = replace(
                best.entry,
                score=score,
                date=datetime.now(timezone.utc),
                player_name=player_name or best.entry.player_name
            )
            # An improved score arrives behind anyone already holding it
            best.arrival = next(self._arrivals)
            self._sort()
            outcome = ConsolidationOutcome.UPDATED
        else:
            outcome = ConsolidationOutcome.UNCHANGED

        logger.debug(f"Leaderboard {self.leaderboard.leaderboard_id}: player {player_id} "
                     f"score {score} -> {outcome.value}")
        return outcome

    def player_best_score(self, player_id: int) -> int:
        best = self._best_slot(player_id)
        return best.entry.score if best else LeaderboardConstants.NO_SCORE

    def rank(self, player_id: int) -> int:
        """Competition rank of the player's best score, or NOT_RANKED."""
        best = self._best_slot(player_id)
        if best is None:
            return LeaderboardConstants.NOT_RANKED
        return sum(1 for slot in self._slots if slot.entry.score > best.entry.score) + 1

    def top_entries(self, limit: int) -> List[LeaderboardEntry]:
        if limit <= 0:
            return []
        return [slot.entry for slot in self._slots[:limit]]

    def ranked_entries(self) -> List[RankedEntry]:
        ranked = []
        for position, slot in enumerate(self._slots, start=1):
            if ranked and ranked[-1].entry.score == slot.entry.score:
                rank = ranked[-1].rank
            else:
                rank = position
            ranked.append(RankedEntry(rank, slot.entry))
        return ranked

    def page(self, page: int = 1, page_size: int = LeaderboardConstants.DEFAULT_PAGE_SIZE) -> LeaderboardPage:
        """Slice the ranked entries into a page."""
        if not isinstance(page, int) or page < 1:
            raise ValueError("page must be a positive integer")
        if not isinstance(page_size, int) or page_size < 1 or page_size > LeaderboardConstants.MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {LeaderboardConstants.MAX_PAGE_SIZE}")

        total_entries = self.entry_count
        total_pages = max(1, math.ceil(total_entries / page_size))
        offset = (page - 1) * page_size
        return LeaderboardPage(
            entries=self.ranked_entries()[offset:offset + page_size],
            current_page=page,
            total_pages=total_pages,
            total_entries=total_entries,
            leaderboard_id=self.leaderboard.leaderboard_id
        )


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submitting a score to a leaderboard."""
    leaderboard_id: int
    player_id: int
    submitted_score: int
    best_score: int
    outcome: ConsolidationOutcome
    rank: int

    @property
    def is_personal_best(self) -> bool:
        return self.outcome.is_personal_best


class LeaderboardService(BaseService):
    """Service for leaderboard submissions and ranking queries."""

    async def _load_leaderboard(self, leaderboard_id: int) -> Leaderboard:
        leaderboard = await self.repository.load_leaderboard(leaderboard_id)
        if leaderboard is None:
            raise LeaderboardNotFoundError(leaderboard_id)
        return leaderboard

    async def _with_player_names(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        """Fill in missing display names, resolving each player once."""
        names: Dict[int, Optional[str]] = {}
        named_entries = []
        for entry in entries:
            if entry.player_name is None:
                if entry.player_id not in names:
                    names[entry.player_id] = await self.repository.resolve_player_name(entry.player_id)
                entry = replace(entry, player_name=names[entry.player_id])
            named_entries.append(entry)
        return named_entries

    async def get_ranker(self, leaderboard_id: int) -> LeaderboardRanker:
        leaderboard = await self._load_leaderboard(leaderboard_id)
        entries = await self.repository.load_leaderboard_entries(leaderboard_id)
        return LeaderboardRanker(leaderboard, await self._with_player_names(entries))

    async def submit_score(self, leaderboard_id: int, player_id: int, score: int) -> SubmissionResult:
        """
        Submit a score with best-score semantics.

        The compare-and-write happens atomically inside the repository; transient
        storage errors are retried before surfacing as TransactionError.
        Negative scores raise InvalidScoreError before storage is touched.
        """
        validate_score(score)
        await self._load_leaderboard(leaderboard_id)

        outcome = await self.execute_with_retry(
            lambda: self.repository.atomic_consolidate(leaderboard_id, player_id, score),
            operation="score submission"
        )
        if outcome.is_personal_best:
            logger.info(f"Player {player_id} set a new best of {score} on leaderboard {leaderboard_id}")

        ranker = await self.get_ranker(leaderboard_id)
        return SubmissionResult(
            leaderboard_id=leaderboard_id,
            player_id=player_id,
            submitted_score=score,
            best_score=ranker.player_best_score(player_id),
            outcome=outcome,
            rank=ranker.rank(player_id)
        )

    async def get_player_rank(self, leaderboard_id: int, player_id: int) -> int:
        ranker = await self.get_ranker(leaderboard_id)
        return ranker.rank(player_id)

    async def get_page(self, leaderboard_id: int, page: int = 1, page_size: int = None) -> LeaderboardPage:
        ranker = await self.get_ranker(leaderboard_id)
        return ranker.page(page, page_size or Config.LEADERBOARD_PAGE_SIZE)
