"""
Scoring Strategy Pattern for Timed Puzzle and Quiz Activities

This module implements the Strategy pattern for the two scorable activity types.
Both share one shape: a base score derived from correctness, plus a time bonus
for finishing before the limit.

- Puzzle: base 100 when solved, otherwise 0 regardless of time
- Quiz: base floor(100 * correct / total), 0 when there were no answers
- Time bonus: floor(base * (1 - solve_time / time_limit) * 0.5), only when the
  activity is timed and finished strictly before the limit

All arithmetic is done on integers so that the floor is exact.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Union
from heroes.constants import ScoringConstants
import logging

logger = logging.getLogger(__name__)

class ActivityType(Enum):
    PUZZLE = "puzzle"
    QUIZ = "quiz"

@dataclass
class ActivityAttempt:
    """Represents the measured result of one puzzle or quiz session"""
    solve_time: int
    time_limit: int = 0
    is_correct: bool = False  # Puzzle correctness signal
    correct_answers: int = 0  # Quiz correctness signal
    total_answers: int = 0

@dataclass
class ScoreBreakdown:
    """Result of scoring calculation for an attempt"""
    base_score: int
    time_bonus: int = 0

    @property
    def total(self) -> int:
        return self.base_score + self.time_bonus

def calculate_time_bonus(base_score: int, solve_time: int, time_limit: int) -> int:
    """
    Calculate the bonus for finishing before the time limit.

    Args:
        base_score: Score earned from correctness alone
        solve_time: Measured duration in seconds (fractional seconds allowed)
        time_limit: Limit in seconds (0 or less means untimed)

    Returns:
        Up to half of the base score, scaled by the unused share of the limit
    """
    if base_score <= 0 or time_limit <= 0:
        return 0

    if solve_time < 0:
        logger.warning(f"Negative solve time {solve_time}s clamped to 0")
        solve_time = 0

    if solve_time >= time_limit:
        return 0

    # floor(base * (limit - time) / limit * 1/2) without float rounding
    numerator = base_score * (time_limit - solve_time) * ScoringConstants.TIME_BONUS_NUMERATOR
    denominator = time_limit * ScoringConstants.TIME_BONUS_DENOMINATOR
    return int(numerator // denominator)

class ScoringStrategy(ABC):
    """
    Abstract base class for activity scoring strategies.

    Subclasses only decide the base score; the time bonus and the score ceiling
    are shared.
    """

    @abstractmethod
    def calculate_base_score(self, attempt: ActivityAttempt) -> int:
        """
        Calculate the correctness part of the score.

        Args:
            attempt: Measured result of the session

        Returns:
            Base score between 0 and ScoringConstants.BASE_SCORE
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Get human-readable name of this strategy"""
        pass

    def calculate(self, attempt: ActivityAttempt) -> ScoreBreakdown:
        """Calculate base score and time bonus for an attempt"""
        base_score = self.calculate_base_score(attempt)
        if base_score <= 0:
            return ScoreBreakdown(0)

        time_bonus = calculate_time_bonus(base_score, attempt.solve_time, attempt.time_limit)
        logger.debug(f"{self.get_strategy_name()} score: base {base_score}, time bonus {time_bonus}")
        return ScoreBreakdown(base_score, time_bonus)

    def get_max_score(self) -> int:
        """Fixed ceiling used to normalise progress displays"""
        return ScoringConstants.MAX_SCORE

class PuzzleScoringStrategy(ScoringStrategy):
    """All-or-nothing scoring: a wrong solution scores 0 no matter how fast."""

    def calculate_base_score(self, attempt: ActivityAttempt) -> int:
        return ScoringConstants.BASE_SCORE if attempt.is_correct else 0

    def get_strategy_name(self) -> str:
        return "Puzzle"

class QuizScoringStrategy(ScoringStrategy):
    """Accuracy-based scoring over the answered questions."""

    def calculate_base_score(self, attempt: ActivityAttempt) -> int:
        total = attempt.total_answers
        if total <= 0:
            return 0

        correct = attempt.correct_answers
        if correct < 0 or correct > total:
            logger.warning(f"Correct answers {correct} outside 0..{total}, clamping")
            correct = min(max(correct, 0), total)

        return ScoringConstants.BASE_SCORE * correct // total

    def get_strategy_name(self) -> str:
        return "Quiz"

class ScoringStrategyFactory:
    """Factory for creating scoring strategies based on activity type"""

    @staticmethod
    def create_strategy(activity_type: Union[str, ActivityType]) -> ScoringStrategy:
        """
        Create appropriate scoring strategy based on type.

        Args:
            activity_type: "puzzle" or "quiz" (or the matching ActivityType)

        Returns:
            Configured ScoringStrategy instance
        """
        if isinstance(activity_type, str):
            try:
                activity_type = ActivityType(activity_type.lower())
            except ValueError:
                raise ValueError(f"Unknown activity type: {activity_type}")

        if activity_type is ActivityType.PUZZLE:
            return PuzzleScoringStrategy()
        return QuizScoringStrategy()

    @staticmethod
    def get_available_strategies() -> List[str]:
        """Get list of available strategy types"""
        return [activity_type.value for activity_type in ActivityType]

def calculate_puzzle_score(solve_time: int, is_correct: bool, time_limit: int) -> int:
    """Score a puzzle attempt"""
    attempt = ActivityAttempt(solve_time=solve_time, time_limit=time_limit, is_correct=is_correct)
    return PuzzleScoringStrategy().calculate(attempt).total

def calculate_quiz_score(correct_answers: int, total_answers: int, solve_time: int, time_limit: int) -> int:
    """Score a quiz attempt"""
    attempt = ActivityAttempt(
        solve_time=solve_time,
        time_limit=time_limit,
        correct_answers=correct_answers,
        total_answers=total_answers
    )
    return QuizScoringStrategy().calculate(attempt).total

def get_max_score() -> int:
    return ScoringConstants.MAX_SCORE
