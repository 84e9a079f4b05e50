"""
Shared fixtures for the Knowledge Heroes engine test suite.

Provides fresh characters, leaderboard entries and both repository
implementations: the dictionary-backed InMemoryRepository and the SQLAlchemy
Database running on a throwaway SQLite file.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from heroes.data_models.character import Character
from heroes.data_models.leaderboard import Leaderboard, LeaderboardEntry
from heroes.database.database import Database
from heroes.database.memory import InMemoryRepository


@pytest.fixture
def character():
    """A level 1 character with default attributes."""
    return Character(player_id=1, name="Ada", character_id=1)


@pytest.fixture
def leaderboard():
    return Leaderboard(leaderboard_id=1, name="Level 1 Puzzles", category="score", level_id=1)


@pytest.fixture
def make_entry():
    """
    Factory for leaderboard entries.

    Entries built by one factory get increasing dates so their order of
    creation is also their chronological order.
    """
    start = datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc)
    created = []

    def _make(player_id, score, player_name=None, entry_id=None):
        entry = LeaderboardEntry(
            player_id=player_id,
            score=score,
            date=start + timedelta(minutes=len(created)),
            player_name=player_name,
            entry_id=entry_id,
        )
        created.append(entry)
        return entry

    return _make


@pytest_asyncio.fixture
async def repository():
    """Fresh in-memory repository (created inside the test's event loop)."""
    return InMemoryRepository()


@pytest_asyncio.fixture
async def database(tmp_path):
    """
    SQLAlchemy repository on a temporary SQLite file.

    The plain sqlite:/// URL is rewritten to the aiosqlite driver by Config.
    """
    db = Database(f"sqlite:///{tmp_path / 'heroes_test.db'}")
    await db.initialize()
    yield db
    await db.close()
