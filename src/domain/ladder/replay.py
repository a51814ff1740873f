"""Parsed game-record payloads and Battle.net profile references."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from domain.ladder.map_pool import Region, parse_region

VICTORY_LABEL = "Win"

_BATTLE_NET_PROFILE = re.compile(
    r"^https?://(?P<region>[a-z]+)\.battle\.net/sc2/[a-z]{2}/profile/"
    r"(?P<profile_id>\d+)/(?P<subregion>\d+)(?:/|$)",
    re.IGNORECASE,
)
_STARCRAFT2_PROFILE = re.compile(
    r"^https?://starcraft2\.com/[a-z]{2}-[a-z]{2}/profile/"
    r"(?P<region_id>\d+)/(?P<subregion>\d+)/(?P<profile_id>\d+)/?$",
    re.IGNORECASE,
)
_REGION_IDS = {1: Region.NA, 2: Region.EU, 3: Region.KR, 5: Region.CN, 6: Region.SEA}


@dataclass(frozen=True)
class ProfileReference:
    region: Region
    subregion: int
    profile_id: int


@dataclass(frozen=True)
class ReplayParticipant:
    """One in-game participant as reported by the record parser."""

    name: str
    profile_url: str
    race: str
    result: str

    @property
    def victory(self) -> bool:
        return self.result == VICTORY_LABEL


@dataclass(frozen=True)
class ParsedReplay:
    """Structured game record submitted by a client."""

    region: str
    map_name: str
    game_length: int
    players: tuple[ReplayParticipant, ...]
    observers: tuple[str, ...]
    file_hash: str
    unix_timestamp: int

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ParsedReplay:
        return cls(
            region=str(raw.get("region", "")),
            map_name=str(raw.get("map_name", "")),
            game_length=int(raw.get("game_length", 0)),
            players=tuple(
                ReplayParticipant(
                    name=str(player.get("name", "")),
                    profile_url=str(player.get("profile_url", "")),
                    race=str(player.get("race", "")),
                    result=str(player.get("result", "")),
                )
                for player in raw.get("players", [])
            ),
            observers=tuple(str(observer) for observer in raw.get("observers", [])),
            file_hash=str(raw["file_hash"]),
            unix_timestamp=int(raw.get("unix_timestamp", 0)),
        )


def parse_profile_url(url: str) -> ProfileReference | None:
    """Extract (region, subregion, profile id) from a Battle.net profile URL."""
    match = _BATTLE_NET_PROFILE.match(url)
    if match is not None:
        region = parse_region(match.group("region"))
    else:
        match = _STARCRAFT2_PROFILE.match(url)
        if match is None:
            return None
        region = _REGION_IDS.get(int(match.group("region_id")))

    if region is None:
        return None
    return ProfileReference(
        region=region,
        subregion=int(match.group("subregion")),
        profile_id=int(match.group("profile_id")),
    )


__all__ = [
    "ParsedReplay",
    "ProfileReference",
    "ReplayParticipant",
    "VICTORY_LABEL",
    "parse_profile_url",
]
