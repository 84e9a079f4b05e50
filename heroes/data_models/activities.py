"""
Puzzle, quiz and level data models.

These are read-only inputs to the scoring formulas. A time limit of zero or less
means the activity is untimed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Mapping, Optional, Tuple

from heroes.constants import DisplayConstants, LevelConstants, ScoringConstants


def format_duration(seconds: int) -> str:
    """Format seconds as m:ss."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}:{seconds:02d}"


def format_time_limit(time_limit: int) -> str:
    if time_limit <= 0:
        return DisplayConstants.UNLIMITED_TIME_LABEL
    return format_duration(time_limit)


@dataclass(frozen=True)
class Answer:
    text: str
    correct: bool = False
    answer_id: Optional[int] = None


@dataclass(frozen=True)
class Question:
    """Multiple-choice question."""
    text: str
    answers: Tuple[Answer, ...] = field(default_factory=tuple)
    question_id: Optional[int] = None
    difficulty: str = ""

    @property
    def correct_answer(self) -> Optional[Answer]:
        return next((answer for answer in self.answers if answer.correct), None)

    @property
    def has_correct_answer(self) -> bool:
        return self.correct_answer is not None

    def is_correct_answer(self, answer_id: Optional[int]) -> bool:
        """Unknown answer ids count as wrong."""
        for answer in self.answers:
            if answer.answer_id == answer_id:
                return answer.correct
        return False


@dataclass(frozen=True)
class Puzzle:
    """Puzzle with a single exact-match solution."""
    name: str
    solution: Optional[str] = None
    time_limit: int = 0
    puzzle_id: Optional[int] = None
    level_id: Optional[int] = None
    puzzle_type: str = ""
    description: str = ""
    data: str = ""

    @property
    def has_time_limit(self) -> bool:
        return self.time_limit > 0

    @property
    def formatted_time_limit(self) -> str:
        return format_time_limit(self.time_limit)

    def check_solution(self, submitted: Optional[str]) -> bool:
        return self.solution is not None and self.solution == submitted


@dataclass(frozen=True)
class Quiz:
    """Ordered set of questions answered in one timed session."""
    name: str
    questions: Tuple[Question, ...] = field(default_factory=tuple)
    time_limit: int = 0
    quiz_id: Optional[int] = None
    level_id: Optional[int] = None
    description: str = ""

    @property
    def has_time_limit(self) -> bool:
        return self.time_limit > 0

    @property
    def formatted_time_limit(self) -> str:
        return format_time_limit(self.time_limit)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    def count_correct(self, selected_answers: Mapping[int, int]) -> int:
        """
        Count correct answers in a submission.

        Args:
            selected_answers: Mapping of question_id to the chosen answer_id

        Returns:
            Number of questions answered correctly (unanswered count as wrong)
        """
        return sum(
            1 for question in self.questions
            if question.is_correct_answer(selected_answers.get(question.question_id))
        )


class Difficulty(Enum):
    UNCLASSIFIED = 0
    EASY = 1
    MEDIUM = 2
    HARD = 3
    EXPERT = 4

    @classmethod
    def classify(cls, raw: Optional[str]) -> "Difficulty":
        return _DIFFICULTY_NAMES.get((raw or "").lower(), cls.UNCLASSIFIED)

    @property
    def color(self) -> str:
        return _DIFFICULTY_COLORS.get(self, DisplayConstants.DEFAULT_DIFFICULTY_COLOR)


_DIFFICULTY_NAMES = {
    "easy": Difficulty.EASY,
    "medium": Difficulty.MEDIUM,
    "hard": Difficulty.HARD,
    "expert": Difficulty.EXPERT,
}

_DIFFICULTY_COLORS = {
    Difficulty.EASY: "#00FF00",
    Difficulty.MEDIUM: "#FFFF00",
    Difficulty.HARD: "#FFA500",
    Difficulty.EXPERT: "#FF0000",
}


@dataclass(frozen=True)
class Level:
    """Game level grouping puzzles and quizzes."""
    name: str
    difficulty: str = ""
    puzzles: Tuple[Puzzle, ...] = field(default_factory=tuple)
    quizzes: Tuple[Quiz, ...] = field(default_factory=tuple)
    level_id: Optional[int] = None
    unlock_requirement: Optional[str] = None
    description: str = ""
    background_path: Optional[str] = None

    @property
    def difficulty_class(self) -> Difficulty:
        return Difficulty.classify(self.difficulty)

    @property
    def max_stars(self) -> int:
        return LevelConstants.MAX_STARS

    @property
    def max_score(self) -> int:
        return (len(self.puzzles) + len(self.quizzes)) * ScoringConstants.MAX_SCORE

    def is_unlocked(self, completed_level_ids: AbstractSet[int]) -> bool:
        """
        Check the unlock requirement against the player's completed levels.

        An empty requirement means the level is always open. "level:<id>" opens
        once that level is completed. Anything unparseable keeps the level locked.
        """
        if not self.unlock_requirement:
            return True

        prefix = LevelConstants.UNLOCK_LEVEL_PREFIX
        if not self.unlock_requirement.startswith(prefix):
            return False

        try:
            required_level_id = int(self.unlock_requirement[len(prefix):])
        except ValueError:
            return False
        return required_level_id in completed_level_ids
