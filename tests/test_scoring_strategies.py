"""
Scoring Strategy Tests
======================

Covers the puzzle and quiz scoring formulas, the shared time bonus and the
strategy factory.
"""

import logging

import pytest

from heroes.utils.scoring_strategies import (
    ActivityAttempt,
    ActivityType,
    PuzzleScoringStrategy,
    QuizScoringStrategy,
    ScoringStrategyFactory,
    calculate_puzzle_score,
    calculate_quiz_score,
    calculate_time_bonus,
    get_max_score,
)


class TestPuzzleScoring:
    """All-or-nothing base score with a time bonus."""

    def test_instant_solve_scores_maximum(self):
        assert calculate_puzzle_score(0, True, 100) == 150

    def test_solve_at_limit_has_no_bonus(self):
        assert calculate_puzzle_score(100, True, 100) == 100

    def test_solve_over_limit_has_no_bonus(self):
        assert calculate_puzzle_score(250, True, 100) == 100

    def test_halfway_solve(self):
        assert calculate_puzzle_score(50, True, 100) == 125

    def test_wrong_solution_scores_zero(self):
        """Speed never rescues a wrong answer."""
        assert calculate_puzzle_score(10, False, 100) == 0
        assert calculate_puzzle_score(0, False, 100) == 0

    def test_untimed_puzzle(self):
        assert calculate_puzzle_score(5, True, 0) == 100
        assert calculate_puzzle_score(5, True, -30) == 100

    def test_breakdown(self):
        breakdown = PuzzleScoringStrategy().calculate(
            ActivityAttempt(solve_time=30, time_limit=60, is_correct=True)
        )
        assert breakdown.base_score == 100
        assert breakdown.time_bonus == 25
        assert breakdown.total == 125

    def test_fractional_solve_time_scores_whole_points(self):
        score = calculate_puzzle_score(12.5, True, 100)
        # bonus floor(100 * 87.5 / 200) = 43
        assert score == 143
        assert isinstance(score, int)
        assert isinstance(calculate_time_bonus(75, 0.5, 60), int)

    def test_negative_solve_time_treated_as_instant(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert calculate_puzzle_score(-5, True, 100) == 150
        assert "Negative solve time" in caplog.text


class TestQuizScoring:
    """Accuracy-based base score with a time bonus."""

    def test_three_of_four_untimed(self):
        assert calculate_quiz_score(3, 4, 10, 0) == 75

    def test_half_correct_instant_quiz(self):
        assert calculate_quiz_score(5, 10, 0, 60) == 75

    def test_perfect_instant_quiz(self):
        assert calculate_quiz_score(5, 5, 0, 60) == 150

    def test_base_score_is_floored(self):
        assert calculate_quiz_score(1, 3, 0, 0) == 33
        assert calculate_quiz_score(2, 3, 0, 0) == 66

    def test_floored_base_with_bonus(self):
        # base 66, bonus floor(66 * 60 / 180) = 22
        assert calculate_quiz_score(2, 3, 30, 90) == 88

    def test_no_answers_scores_zero(self):
        assert calculate_quiz_score(0, 0, 0, 60) == 0

    def test_no_correct_answers_scores_zero(self):
        assert calculate_quiz_score(0, 10, 0, 60) == 0

    def test_correct_answers_clamped_to_total(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert calculate_quiz_score(7, 4, 0, 0) == 100
        assert "clamping" in caplog.text

    def test_negative_correct_answers_clamped(self):
        assert calculate_quiz_score(-2, 4, 0, 60) == 0

    def test_score_never_exceeds_maximum(self):
        for correct in range(0, 11):
            for solve_time in (0, 1, 30, 59, 60, 61):
                assert 0 <= calculate_quiz_score(correct, 10, solve_time, 60) <= get_max_score()


class TestTimeBonus:
    """Shared time bonus helper."""

    @pytest.mark.parametrize("base,solve_time,limit,expected", [
        (100, 0, 100, 50),
        (100, 50, 100, 25),
        (100, 99, 100, 0),
        (100, 100, 100, 0),
        (75, 0, 60, 37),
        (0, 0, 60, 0),
        (100, 10, 0, 0),
    ])
    def test_bonus(self, base, solve_time, limit, expected):
        assert calculate_time_bonus(base, solve_time, limit) == expected


class TestScoringStrategyFactory:
    """Factory lookup by name or enum."""

    def test_create_by_name(self):
        assert isinstance(ScoringStrategyFactory.create_strategy("puzzle"), PuzzleScoringStrategy)
        assert isinstance(ScoringStrategyFactory.create_strategy("QUIZ"), QuizScoringStrategy)

    def test_create_by_enum(self):
        assert isinstance(ScoringStrategyFactory.create_strategy(ActivityType.QUIZ), QuizScoringStrategy)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown activity type"):
            ScoringStrategyFactory.create_strategy("crossword")

    def test_available_strategies(self):
        assert ScoringStrategyFactory.get_available_strategies() == ["puzzle", "quiz"]

    def test_strategy_metadata(self):
        strategy = ScoringStrategyFactory.create_strategy("puzzle")
        assert strategy.get_strategy_name() == "Puzzle"
        assert strategy.get_max_score() == 150
