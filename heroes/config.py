import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Engine configuration settings"""

    # Database settings
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///heroes.db')
    MAX_DB_RETRIES = int(os.getenv('MAX_DB_RETRIES', 3))

    # Logging settings
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')
    LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'False').lower() == 'true'

    # Leaderboard settings
    LEADERBOARD_PAGE_SIZE = int(os.getenv('LEADERBOARD_PAGE_SIZE', 10))

    # Character settings
    STARTING_LEVEL = 1
    DEFAULT_ATTRIBUTE_VALUE = 5
    ATTRIBUTE_GAIN_PER_LEVEL = 1

    @classmethod
    def get_async_database_url(cls, database_url: str = None) -> str:
        """Convert a plain sqlite URL to its aiosqlite form"""
        url = database_url or cls.DATABASE_URL
        if url.startswith('sqlite:///'):
            url = url.replace('sqlite:///', 'sqlite+aiosqlite:///')
        return url

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL is required")
        if cls.LEADERBOARD_PAGE_SIZE < 1 or cls.LEADERBOARD_PAGE_SIZE > 50:
            raise ValueError("LEADERBOARD_PAGE_SIZE must be between 1 and 50")
        if cls.MAX_DB_RETRIES < 1:
            raise ValueError("MAX_DB_RETRIES must be at least 1")
