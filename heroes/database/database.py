from contextlib import asynccontextmanager
from typing import List, Optional

from sqlalchemy import select, insert, update, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import aliased

from heroes.config import Config
from heroes.constants import LeaderboardConstants
from heroes.data_models.character import Character
from heroes.data_models.leaderboard import ConsolidationOutcome, Leaderboard, LeaderboardEntry
from heroes.database.models import (
    Base, PlayerRecord, CharacterRecord, LeaderboardRecord, LeaderboardEntryRecord
)
from heroes.database.repository import ProgressionRepository
from heroes.utils.logger import setup_logger
from heroes.utils.progression_exceptions import CharacterNotFoundError, DatabaseError, InvalidScoreError

class Database(ProgressionRepository):
    """SQLAlchemy-backed ProgressionRepository"""

    # A lost insert race is retried once; the second pass takes the update path
    CONSOLIDATE_ATTEMPTS = 2

    def __init__(self, database_url: str = None):
        self.logger = setup_logger(__name__)
        self.database_url = Config.get_async_database_url(database_url)
        self.engine = None
        self.async_session = None

    async def initialize(self):
        """Initialize the database connection and create tables"""
        self.logger.info("Initializing database...")

        self.engine = create_async_engine(
            self.database_url,
            echo=Config.DEBUG,
            future=True
        )

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

        # Create all tables
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.logger.info("Database initialized successfully")

    @asynccontextmanager
    async def get_session(self):
        """Get a database session"""
        async with self.async_session() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    @asynccontextmanager
    async def transaction(self):
        """
        Create a transaction boundary for atomic operations.

        All operations within the context are committed together on success,
        or rolled back together on failure. Exceptions must be allowed to
        propagate out of the context for rollback to occur.
        """
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def close(self):
        """Close the database connection"""
        if self.engine:
            await self.engine.dispose()

    # ============================================================================
    # Players
    # ============================================================================

    async def create_player(self, username: str) -> int:
        try:
            async with self.transaction() as session:
                player = PlayerRecord(username=username)
                session.add(player)
                await session.flush()
                return player.id
        except SQLAlchemyError as e:
            raise DatabaseError("player creation", str(e)) from e

    async def resolve_player_name(self, player_id: int) -> Optional[str]:
        async with self.get_session() as session:
            player = await session.get(PlayerRecord, player_id)
            return player.username if player else None

    # ============================================================================
    # Characters
    # ============================================================================

    async def load_character(self, character_id: int) -> Optional[Character]:
        async with self.get_session() as session:
            record = await session.get(CharacterRecord, character_id)
            return record.to_character() if record else None

    async def save_character(self, character: Character) -> Character:
        try:
            async with self.transaction() as session:
                if character.character_id is None:
                    record = CharacterRecord(player_id=character.player_id)
                    record.apply(character)
                    session.add(record)
                    await session.flush()
                    character.character_id = record.id
                else:
                    record = await session.get(CharacterRecord, character.character_id)
                    if record is None:
                        raise CharacterNotFoundError(character.character_id)
                    record.apply(character)
        except SQLAlchemyError as e:
            raise DatabaseError("character save", str(e)) from e

        self.logger.debug(f"Saved character {character.character_id} at level {character.level}")
        return character

    # ============================================================================
    # Leaderboards
    # ============================================================================

    async def create_leaderboard(self, name: str, category: str = "score", level_id: int = 0) -> Leaderboard:
        try:
            async with self.transaction() as session:
                record = LeaderboardRecord(name=name, category=category, level_id=level_id)
                session.add(record)
                await session.flush()
                return record.to_leaderboard()
        except SQLAlchemyError as e:
            raise DatabaseError("leaderboard creation", str(e)) from e

    async def load_leaderboard(self, leaderboard_id: int) -> Optional[Leaderboard]:
        async with self.get_session() as session:
            record = await session.get(LeaderboardRecord, leaderboard_id)
            return record.to_leaderboard() if record else None

    async def load_leaderboard_entries(self, leaderboard_id: int) -> List[LeaderboardEntry]:
        async with self.get_session() as session:
            query = (
                select(LeaderboardEntryRecord, PlayerRecord.username)
                .outerjoin(PlayerRecord, LeaderboardEntryRecord.player_id == PlayerRecord.id)
                .where(LeaderboardEntryRecord.leaderboard_id == leaderboard_id)
                .order_by(
                    LeaderboardEntryRecord.score.desc(),
                    LeaderboardEntryRecord.arrival.asc(),
                    LeaderboardEntryRecord.id.asc()
                )
            )
            result = await session.execute(query)
            return [record.to_entry(username) for record, username in result.all()]

    async def get_player_best_score(self, leaderboard_id: int, player_id: int) -> int:
        async with self.get_session() as session:
            best = await session.scalar(
                select(func.max(LeaderboardEntryRecord.score)).where(
                    LeaderboardEntryRecord.leaderboard_id == leaderboard_id,
                    LeaderboardEntryRecord.player_id == player_id
                )
            )
            return best if best is not None else LeaderboardConstants.NO_SCORE

    async def atomic_consolidate(self, leaderboard_id: int, player_id: int, score: int) -> ConsolidationOutcome:
        """Raise the player's best score in one transaction, inserting the first entry if needed"""
        if score < 0:
            raise InvalidScoreError(score, "Scores cannot be negative")

        for attempt in range(self.CONSOLIDATE_ATTEMPTS):
            try:
                async with self.transaction() as session:
                    return await self._consolidate(session, leaderboard_id, player_id, score)
            except IntegrityError as e:
                if attempt == self.CONSOLIDATE_ATTEMPTS - 1:
                    raise DatabaseError("score consolidation", str(e)) from e
                self.logger.warning(
                    f"Concurrent first submission for player {player_id} on leaderboard {leaderboard_id}, retrying"
                )
            except SQLAlchemyError as e:
                raise DatabaseError("score consolidation", str(e)) from e

    @staticmethod
    def _next_arrival(leaderboard_id: int):
        """Scalar subquery for the next arrival number on a leaderboard"""
        # Aliased so the subquery is not correlated to the row being written
        others = aliased(LeaderboardEntryRecord)
        return (
            select(func.coalesce(func.max(others.arrival), 0) + 1)
            .where(others.leaderboard_id == leaderboard_id)
            .scalar_subquery()
        )

    async def _consolidate(self, session: AsyncSession, leaderboard_id: int, player_id: int, score: int) -> ConsolidationOutcome:
        # Conditional write: only a strictly better score touches the row
        result = await session.execute(
            update(LeaderboardEntryRecord)
            .where(
                LeaderboardEntryRecord.leaderboard_id == leaderboard_id,
                LeaderboardEntryRecord.player_id == player_id,
                LeaderboardEntryRecord.score < score
            )
            .values(score=score, date=func.now(), arrival=self._next_arrival(leaderboard_id))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            return ConsolidationOutcome.UPDATED

        existing = await session.scalar(
            select(func.count(LeaderboardEntryRecord.id)).where(
                LeaderboardEntryRecord.leaderboard_id == leaderboard_id,
                LeaderboardEntryRecord.player_id == player_id
            )
        )
        if existing:
            return ConsolidationOutcome.UNCHANGED

        await session.execute(
            insert(LeaderboardEntryRecord).values(
                leaderboard_id=leaderboard_id,
                player_id=player_id,
                score=score,
                arrival=self._next_arrival(leaderboard_id)
            )
        )
        return ConsolidationOutcome.INSERTED
