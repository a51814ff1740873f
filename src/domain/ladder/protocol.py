"""Collaborator contracts consumed by the result pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from domain.ladder.map_pool import Region
from domain.ladder.points import DefeatOutcome


@dataclass(frozen=True)
class CharacterRecord:
    character_id: int
    player_id: int


@runtime_checkable
class IdentityResolver(Protocol):
    """Maps an external Battle.net identity to an internal character."""

    def resolve(self, region: Region, subregion: int, profile_id: int) -> CharacterRecord | None: ...


@runtime_checkable
class LadderSession(Protocol):
    """Live ladder state of one player."""

    player_id: int
    ladder_points: int
    pending_matchmaking_id: int | None
    pending_opponent_id: int | None
    pending_map_id: int | None

    def is_matched_with(self, other: LadderSession) -> bool: ...

    def is_on_map(self, map_id: int) -> bool: ...

    def forfeit_pending_match(self) -> bool: ...

    def clear_pending_match(self) -> None: ...

    def apply_defeat_against(self, other: LadderSession) -> DefeatOutcome: ...

    def snapshot(self) -> LadderSession: ...

    def restore(self, snapshot: LadderSession) -> None: ...


@runtime_checkable
class SessionRegistry(Protocol):
    def lookup_live_session(self, player_id: int) -> LadderSession | None: ...


@runtime_checkable
class StatsBroadcaster(Protocol):
    def broadcast_stats(self, player_id: int) -> None: ...


__all__ = [
    "CharacterRecord",
    "IdentityResolver",
    "LadderSession",
    "SessionRegistry",
    "StatsBroadcaster",
]
