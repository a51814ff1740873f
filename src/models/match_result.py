"""match_results, match_result_players and match_result_sources table models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import CreatedAtMixin


class MatchResult(CreatedAtMixin, Base):
    """One settled ladder match (one row per accepted submission)."""

    __tablename__ = "match_results"
    __table_args__ = (
        Index("idx_match_results_map", "map_id"),
        Index("idx_match_results_played_at", "played_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    map_id: Mapped[int] = mapped_column(ForeignKey("maps.id"), nullable=False)
    matchmaking_session_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)


class MatchResultPlayer(Base):
    """Per-participant outcome of a settled match (always two per match)."""

    __tablename__ = "match_result_players"
    __table_args__ = (
        UniqueConstraint("match_id", "player_id", name="uq_match_result_players_match_player"),
        CheckConstraint(
            "points_after - points_before = points_delta",
            name="ck_match_result_players_delta",
        ),
        Index("idx_match_result_players_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(ForeignKey("match_results.id"), nullable=False)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    character_id: Mapped[int] = mapped_column(ForeignKey("characters.id"), nullable=False)
    points_before: Mapped[int] = mapped_column(Integer, nullable=False)
    points_after: Mapped[int] = mapped_column(Integer, nullable=False)
    points_delta: Mapped[int] = mapped_column(Integer, nullable=False)
    race: Mapped[str] = mapped_column(String(16), nullable=False)
    victory: Mapped[bool] = mapped_column(Boolean, nullable=False)


class MatchResultSource(CreatedAtMixin, Base):
    """Idempotency marker: the replay hash a match was settled from."""

    __tablename__ = "match_result_sources"
    __table_args__ = (
        UniqueConstraint("replay_hash", name="uq_match_result_sources_replay_hash"),
        Index("idx_match_result_sources_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int | None] = mapped_column(ForeignKey("match_results.id"), nullable=True)
    replay_hash: Mapped[str] = mapped_column(String(128), nullable=False)
