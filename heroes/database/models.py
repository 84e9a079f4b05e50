from sqlalchemy import (
    Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from heroes.config import Config
from heroes.data_models.character import Character
from heroes.data_models.leaderboard import Leaderboard, LeaderboardEntry

Base = declarative_base()

class PlayerRecord(Base):
    __tablename__ = 'players'

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True)

    # Metadata
    registered_at = Column(DateTime, default=func.now())

    # Relationships
    characters = relationship("CharacterRecord", back_populates="player", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<PlayerRecord(id={self.id}, username='{self.username}')>"

class CharacterRecord(Base):
    __tablename__ = 'characters'

    id = Column(Integer, primary_key=True)
    player_id = Column(Integer, ForeignKey('players.id'), nullable=False, index=True)
    name = Column(String(100), nullable=False, default="")
    avatar_path = Column(String(255), nullable=True)

    # Progression
    level = Column(Integer, nullable=False, default=Config.STARTING_LEVEL)
    experience = Column(Integer, nullable=False, default=0)

    # Attributes
    intelligence = Column(Integer, nullable=False, default=Config.DEFAULT_ATTRIBUTE_VALUE)
    strength = Column(Integer, nullable=False, default=Config.DEFAULT_ATTRIBUTE_VALUE)
    agility = Column(Integer, nullable=False, default=Config.DEFAULT_ATTRIBUTE_VALUE)
    wisdom = Column(Integer, nullable=False, default=Config.DEFAULT_ATTRIBUTE_VALUE)

    # Relationships
    player = relationship("PlayerRecord", back_populates="characters")

    __table_args__ = (
        CheckConstraint('level >= 1', name='ck_character_level_positive'),
        CheckConstraint('experience >= 0', name='ck_character_experience_non_negative'),
    )

    def apply(self, character: Character):
        """Copy mutable progression state from a Character"""
        self.name = character.name
        self.avatar_path = character.avatar_path
        self.level = character.level
        self.experience = character.experience
        self.intelligence = character.intelligence
        self.strength = character.strength
        self.agility = character.agility
        self.wisdom = character.wisdom

    def to_character(self) -> Character:
        return Character(
            player_id=self.player_id,
            name=self.name,
            character_id=self.id,
            level=self.level,
            experience=self.experience,
            intelligence=self.intelligence,
            strength=self.strength,
            agility=self.agility,
            wisdom=self.wisdom,
            avatar_path=self.avatar_path
        )

    def __repr__(self):
        return f"<CharacterRecord(id={self.id}, name='{self.name}', level={self.level}, exp={self.experience})>"

class LeaderboardRecord(Base):
    __tablename__ = 'leaderboards'

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    category = Column(String(50), nullable=False, default="score")
    level_id = Column(Integer, nullable=False, default=0)  # 0 = global leaderboard

    # Relationships
    entries = relationship("LeaderboardEntryRecord", back_populates="leaderboard", cascade="all, delete-orphan")

    def to_leaderboard(self) -> Leaderboard:
        return Leaderboard(
            leaderboard_id=self.id,
            name=self.name,
            category=self.category,
            level_id=self.level_id
        )

    def __repr__(self):
        return f"<LeaderboardRecord(id={self.id}, name='{self.name}', category='{self.category}')>"

class LeaderboardEntryRecord(Base):
    """
    Best score of a player on a leaderboard.

    One row per (leaderboard, player). The unique constraint makes a concurrent
    first submission fail loudly instead of creating a second current entry.
    """
    __tablename__ = 'leaderboard_entries'

    id = Column(Integer, primary_key=True)
    leaderboard_id = Column(Integer, ForeignKey('leaderboards.id'), nullable=False)
    player_id = Column(Integer, ForeignKey('players.id'), nullable=False)

    score = Column(Integer, nullable=False)
    date = Column(DateTime, default=func.now())

    # Per-leaderboard sequence; bumped whenever the score improves, breaks ties
    arrival = Column(Integer, nullable=False, default=0)

    # Relationships
    leaderboard = relationship("LeaderboardRecord", back_populates="entries")
    player = relationship("PlayerRecord")

    __table_args__ = (
        UniqueConstraint('leaderboard_id', 'player_id', name='uq_leaderboard_entry_player'),
        CheckConstraint('score >= 0', name='ck_leaderboard_entry_score_non_negative'),
        Index('ix_leaderboard_entries_ranking', 'leaderboard_id', 'score', 'arrival'),
    )

    def to_entry(self, player_name: str = None) -> LeaderboardEntry:
        return LeaderboardEntry(
            player_id=self.player_id,
            score=self.score,
            date=self.date,
            player_name=player_name,
            entry_id=self.id,
            leaderboard_id=self.leaderboard_id
        )

    def __repr__(self):
        return f"<LeaderboardEntryRecord(leaderboard_id={self.leaderboard_id}, player_id={self.player_id}, score={self.score})>"
