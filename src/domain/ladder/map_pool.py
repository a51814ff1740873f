"""Ranked map pool: lookup by name and veto-aware random selection."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum


class Region(str, Enum):
    """Battle.net server region."""

    NA = "na"
    EU = "eu"
    KR = "kr"
    SEA = "sea"
    CN = "cn"


_REGION_ALIASES = {"us": Region.NA}


def parse_region(value: str | None) -> Region | None:
    """Parse a region code as found in game records; unknown codes yield None."""
    if not value:
        return None
    code = value.strip().lower()
    if code in _REGION_ALIASES:
        return _REGION_ALIASES[code]
    try:
        return Region(code)
    except ValueError:
        return None


@dataclass(frozen=True)
class MapMessage:
    """Client-facing map advertisement."""

    region: Region
    battle_net_name: str
    battle_net_id: int


@dataclass(frozen=True)
class LadderMap:
    id: int
    region: Region
    battle_net_name: str
    battle_net_id: int = 0
    in_ranked_pool: bool = False

    def to_message(self) -> MapMessage:
        return MapMessage(
            region=self.region,
            battle_net_name=self.battle_net_name,
            battle_net_id=self.battle_net_id,
        )


class MapPool:
    """Immutable registry of ladder maps keyed by id."""

    def __init__(self, maps: Iterable[LadderMap]) -> None:
        by_id: dict[int, LadderMap] = {}
        for ladder_map in maps:
            if ladder_map.id in by_id:
                raise ValueError(f"Duplicate map id in pool: {ladder_map.id}")
            by_id[ladder_map.id] = ladder_map
        self._maps = by_id

    def __len__(self) -> int:
        return len(self._maps)

    def __iter__(self):
        return iter(self._maps.values())

    def get(self, map_id: int) -> LadderMap | None:
        return self._maps.get(map_id)

    def resolve(self, region: Region | None, name: str) -> LadderMap | None:
        """Exact match on region and Battle.net map name."""
        for ladder_map in self._maps.values():
            if ladder_map.region == region and ladder_map.battle_net_name == name:
                return ladder_map
        return None

    def ranked_maps(self, region: Region) -> list[LadderMap]:
        return [m for m in self._maps.values() if m.region == region and m.in_ranked_pool]

    def pick_random(
        self,
        region: Region,
        *veto_lists: Sequence[LadderMap | None] | None,
        rng: random.Random | None = None,
    ) -> LadderMap | None:
        """Uniformly pick a ranked map in ``region`` that no veto list excludes.

        Returns None when every candidate is vetoed or the region has no
        ranked maps.
        """
        vetoed: set[tuple[int, Region]] = set()
        for veto_list in veto_lists:
            for veto in veto_list or ():
                if veto is None:
                    continue
                vetoed.add((veto.id, veto.region))

        candidates = [
            m
            for m in self.ranked_maps(region)
            if (m.id, m.region) not in vetoed
        ]
        if not candidates:
            return None
        return (rng or random).choice(candidates)


__all__ = ["LadderMap", "MapMessage", "MapPool", "Region", "parse_region"]
