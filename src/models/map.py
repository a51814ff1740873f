"""maps and map_vetoes table models."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import CreatedAtMixin


class Map(Base):
    """Ladder map known to the service, ranked or not."""

    __tablename__ = "maps"
    __table_args__ = (
        UniqueConstraint("region", "battle_net_name", name="uq_maps_region_name"),
        Index("idx_maps_region_ranked", "region", "in_ranked_pool"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    region: Mapped[str] = mapped_column(String(8), nullable=False)
    battle_net_name: Mapped[str] = mapped_column(String(128), nullable=False)
    battle_net_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    in_ranked_pool: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class MapVeto(CreatedAtMixin, Base):
    """One player's exclusion of one map from random selection."""

    __tablename__ = "map_vetoes"
    __table_args__ = (
        UniqueConstraint("player_id", "map_id", name="uq_map_vetoes_player_map"),
        Index("idx_map_vetoes_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    map_id: Mapped[int] = mapped_column(ForeignKey("maps.id"), nullable=False)
