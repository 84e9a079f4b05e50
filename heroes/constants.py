"""
Engine-wide constants for the Knowledge Heroes progression and scoring engine.

This module contains the formula coefficients and sentinel values used throughout
the codebase so that every curve and score can be traced back to one place.
"""

class ExperienceConstants:
    """Constants for the experience-to-level curve."""

    # Flat cost of every level after the first
    BASE_LEVEL_COST = 1000

    # Extra cost added per level already gained (triangular growth)
    LEVEL_COST_INCREMENT = 100

class AttributeConstants:
    """Constants for attribute bonuses."""

    # Every 5 points of an attribute grant +1 bonus
    BONUS_DIVISOR = 5

class ScoringConstants:
    """Constants for timed puzzle and quiz scoring."""

    # Base score for a fully correct activity
    BASE_SCORE = 100

    # Finishing instantly adds up to 50% of the base score
    TIME_BONUS_NUMERATOR = 1
    TIME_BONUS_DENOMINATOR = 2

    # Base score plus the maximum time bonus
    MAX_SCORE = 150

class LeaderboardConstants:
    """Constants for leaderboard queries."""

    # Sentinels for players without an entry
    NOT_RANKED = -1
    NO_SCORE = -1

    # Pagination bounds (mirrors the leaderboard page validation)
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 50

class LevelConstants:
    """Constants for level content."""

    # Every level awards at most 3 stars
    MAX_STARS = 3

    # Unlock requirement prefix, e.g. "level:4"
    UNLOCK_LEVEL_PREFIX = "level:"

class DisplayConstants:
    """Constants for formatted output."""

    ENTRY_DATE_FORMAT = "%d.%m.%Y %H:%M"
    STAR_SYMBOL = "★"
    DEFAULT_DIFFICULTY_COLOR = "#C0C0C0"
    UNLIMITED_TIME_LABEL = "Unlimited"
