"""
Activity scoring service.

Scores puzzle and quiz sessions with the timed scoring strategies and, when a
leaderboard is given, submits the score with best-score semantics.
"""

from dataclasses import dataclass
from typing import Mapping, Optional
import logging

from heroes.data_models.activities import Puzzle, Quiz
from heroes.services.base import BaseService
from heroes.services.leaderboard import LeaderboardService, SubmissionResult
from heroes.utils.scoring_strategies import (
    ActivityAttempt, ActivityType, ScoreBreakdown, ScoringStrategyFactory
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActivityResult:
    """Score of one session and, optionally, its leaderboard submission."""
    activity_type: ActivityType
    breakdown: ScoreBreakdown
    max_score: int
    submission: Optional[SubmissionResult] = None

    @property
    def score(self) -> int:
        return self.breakdown.total

    @property
    def percent_of_max(self) -> int:
        return self.score * 100 // self.max_score


class ActivityService(BaseService):
    """Service for scoring puzzle and quiz sessions."""

    def __init__(self, repository, leaderboard_service: LeaderboardService = None):
        super().__init__(repository)
        self.leaderboard_service = leaderboard_service or LeaderboardService(repository)
        self.puzzle_strategy = ScoringStrategyFactory.create_strategy(ActivityType.PUZZLE)
        self.quiz_strategy = ScoringStrategyFactory.create_strategy(ActivityType.QUIZ)

    def score_puzzle(self, puzzle: Puzzle, submitted_solution: Optional[str], solve_time: int) -> ScoreBreakdown:
        attempt = ActivityAttempt(
            solve_time=solve_time,
            time_limit=puzzle.time_limit,
            is_correct=puzzle.check_solution(submitted_solution)
        )
        return self.puzzle_strategy.calculate(attempt)

    def score_quiz(self, quiz: Quiz, selected_answers: Mapping[int, int], solve_time: int) -> ScoreBreakdown:
        attempt = ActivityAttempt(
            solve_time=solve_time,
            time_limit=quiz.time_limit,
            correct_answers=quiz.count_correct(selected_answers),
            total_answers=quiz.question_count
        )
        return self.quiz_strategy.calculate(attempt)

    async def _finish(self, activity_type: ActivityType, breakdown: ScoreBreakdown,
                      player_id: int, leaderboard_id: Optional[int]) -> ActivityResult:
        strategy = self.puzzle_strategy if activity_type is ActivityType.PUZZLE else self.quiz_strategy
        submission = None
        if leaderboard_id is not None:
            submission = await self.leaderboard_service.submit_score(leaderboard_id, player_id, breakdown.total)
        logger.info(f"Player {player_id} scored {breakdown.total} on {activity_type.value}")
        return ActivityResult(activity_type, breakdown, strategy.get_max_score(), submission)

    async def submit_puzzle(self, player_id: int, puzzle: Puzzle, submitted_solution: Optional[str],
                            solve_time: int, leaderboard_id: Optional[int] = None) -> ActivityResult:
        """
        Score a puzzle session and optionally record it on a leaderboard.

        Args:
            player_id: Player who played the session
            puzzle: Puzzle definition
            submitted_solution: The player's answer, compared exactly
            solve_time: Measured duration in seconds
            leaderboard_id: Leaderboard to submit to, if any

        Returns:
            ActivityResult with the score breakdown and submission outcome
        """
        breakdown = self.score_puzzle(puzzle, submitted_solution, solve_time)
        return await self._finish(ActivityType.PUZZLE, breakdown, player_id, leaderboard_id)

    async def submit_quiz(self, player_id: int, quiz: Quiz, selected_answers: Mapping[int, int],
                          solve_time: int, leaderboard_id: Optional[int] = None) -> ActivityResult:
        """Score a quiz session and optionally record it on a leaderboard."""
        breakdown = self.score_quiz(quiz, selected_answers, solve_time)
        return await self._finish(ActivityType.QUIZ, breakdown, player_id, leaderboard_id)
