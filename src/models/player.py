"""players and characters table models."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import CreatedAtMixin


class Player(CreatedAtMixin, Base):
    """Ladder account with its point total and pending matchmaking linkage."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("ladder_points >= 0", name="ck_players_ladder_points"),
        Index("idx_players_pending_opponent", "pending_opponent_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    ladder_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ranked_games: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    forfeits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pending_matchmaking_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pending_opponent_id: Mapped[int | None] = mapped_column(ForeignKey("players.id"), nullable=True)
    pending_map_id: Mapped[int | None] = mapped_column(ForeignKey("maps.id"), nullable=True)


class Character(CreatedAtMixin, Base):
    """Battle.net character registered to a ladder player."""

    __tablename__ = "characters"
    __table_args__ = (
        UniqueConstraint("region", "subregion", "profile_id", name="uq_characters_profile"),
        Index("idx_characters_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    region: Mapped[str] = mapped_column(String(8), nullable=False)
    subregion: Mapped[int] = mapped_column(Integer, nullable=False)
    profile_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str | None] = mapped_column(String(64), nullable=True)
