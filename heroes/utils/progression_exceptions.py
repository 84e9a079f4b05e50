"""
Custom exceptions for the progression engine with user-friendly error messages.
"""

class ProgressionException(Exception):
    """Base exception for progression and leaderboard errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class InvalidExperienceError(ProgressionException, ValueError):
    """Raised when a caller tries to add a negative amount of experience."""
    def __init__(self, amount: int):
        super().__init__(
            f"Experience amount must be non-negative, got {amount}",
            "❌ Experience can only be gained, never lost."
        )
        self.amount = amount

class InvalidScoreError(ProgressionException, ValueError):
    """Raised when a leaderboard score fails validation. Never retried."""
    def __init__(self, score: int, reason: str):
        super().__init__(
            f"Invalid score {score}: {reason}",
            f"❌ {reason}"
        )
        self.score = score

class CharacterNotFoundError(ProgressionException):
    """Raised when a character id does not exist."""
    def __init__(self, character_id: int):
        super().__init__(
            f"Character {character_id} not found",
            "❌ Hero not found!"
        )
        self.character_id = character_id

class LeaderboardNotFoundError(ProgressionException):
    """Raised when a leaderboard id does not exist."""
    def __init__(self, leaderboard_id: int):
        super().__init__(
            f"Leaderboard {leaderboard_id} not found",
            "❌ This leaderboard does not exist!"
        )
        self.leaderboard_id = leaderboard_id

class DatabaseError(ProgressionException):
    """Raised when database operations fail."""
    def __init__(self, operation: str, details: str = None):
        super().__init__(
            f"Database error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
        self.operation = operation

class TransactionError(ProgressionException):
    """Raised when an operation keeps failing after all retries."""
    def __init__(self, operation: str, attempts: int):
        super().__init__(
            f"Transaction failed for {operation} after {attempts} attempts",
            "❌ Failed to save your progress. Please try again."
        )
        self.operation = operation
        self.attempts = attempts
