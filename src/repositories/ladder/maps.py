"""Map pool and map veto persistence."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from domain.ladder.errors import MapVetoLimitError
from domain.ladder.map_pool import LadderMap, MapPool, Region
from models import Map, MapVeto


def sync_maps(session: Session, maps: Iterable[LadderMap]) -> int:
    """Insert or update map rows from configuration; returns the number touched."""
    touched = 0
    for ladder_map in maps:
        row = session.get(Map, ladder_map.id)
        if row is None:
            row = Map(id=ladder_map.id)
            session.add(row)
        row.region = ladder_map.region.value
        row.battle_net_name = ladder_map.battle_net_name
        row.battle_net_id = ladder_map.battle_net_id
        row.in_ranked_pool = ladder_map.in_ranked_pool
        touched += 1
    session.flush()
    return touched


def load_map_pool(session: Session) -> MapPool:
    rows = session.execute(select(Map).order_by(Map.id)).scalars().all()
    return MapPool(_to_ladder_map(row) for row in rows)


def fetch_vetoed_maps(session: Session, player_id: int, pool: MapPool) -> list[LadderMap | None]:
    """Return the player's veto list; vetoes of maps missing from ``pool`` come back as None."""
    map_ids = session.execute(
        select(MapVeto.map_id).where(MapVeto.player_id == player_id).order_by(MapVeto.id)
    ).scalars()
    return [pool.get(map_id) for map_id in map_ids]


def add_map_veto(session: Session, *, player_id: int, ladder_map: LadderMap, max_vetoes: int) -> MapVeto:
    existing = session.execute(
        select(MapVeto).where(MapVeto.player_id == player_id, MapVeto.map_id == ladder_map.id)
    ).scalar_one_or_none()
    if existing is not None:
        return existing

    count = session.scalar(select(func.count()).select_from(MapVeto).where(MapVeto.player_id == player_id))
    if int(count or 0) >= max_vetoes:
        raise MapVetoLimitError()

    veto = MapVeto(player_id=player_id, map_id=ladder_map.id)
    session.add(veto)
    session.flush()
    return veto


def remove_map_veto(session: Session, *, player_id: int, map_id: int) -> bool:
    veto = session.execute(
        select(MapVeto).where(MapVeto.player_id == player_id, MapVeto.map_id == map_id)
    ).scalar_one_or_none()
    if veto is None:
        return False
    session.delete(veto)
    session.flush()
    return True


def _to_ladder_map(row: Map) -> LadderMap:
    return LadderMap(
        id=row.id,
        region=Region(row.region),
        battle_net_name=row.battle_net_name,
        battle_net_id=row.battle_net_id,
        in_ranked_pool=row.in_ranked_pool,
    )


__all__ = ["add_map_veto", "fetch_vetoed_maps", "load_map_pool", "remove_map_veto", "sync_maps"]
