"""Player, character and live-session persistence."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from domain.ladder.map_pool import Region
from domain.ladder.points import LadderPointCalculator
from domain.ladder.protocol import CharacterRecord
from domain.ladder.session import PlayerSession
from models import Character, Player


def register_player(
    session: Session,
    *,
    name: str,
    region: Region,
    subregion: int,
    profile_id: int,
    character_name: str | None = None,
    ladder_points: int = 0,
) -> tuple[Player, Character]:
    """Create a player with one registered character."""
    player = Player(name=name, ladder_points=ladder_points)
    session.add(player)
    session.flush()

    character = Character(
        player_id=player.id,
        region=region.value,
        subregion=subregion,
        profile_id=profile_id,
        name=character_name or name,
    )
    session.add(character)
    session.flush()
    return player, character


def find_character(
    session: Session,
    *,
    region: Region,
    subregion: int,
    profile_id: int,
) -> Character | None:
    statement = select(Character).where(
        Character.region == region.value,
        Character.subregion == subregion,
        Character.profile_id == profile_id,
    )
    return session.execute(statement).scalar_one_or_none()


def to_player_session(player: Player, calculator: LadderPointCalculator) -> PlayerSession:
    return PlayerSession(
        player_id=player.id,
        calculator=calculator,
        ladder_points=player.ladder_points,
        ranked_games=player.ranked_games,
        wins=player.wins,
        losses=player.losses,
        forfeits=player.forfeits,
        pending_matchmaking_id=player.pending_matchmaking_id,
        pending_opponent_id=player.pending_opponent_id,
        pending_map_id=player.pending_map_id,
    )


def save_player_session(session: Session, ladder_session: PlayerSession) -> None:
    """Write points, counters and matchmaking linkage back to the players row."""
    result = session.execute(
        update(Player)
        .where(Player.id == ladder_session.player_id)
        .values(
            ladder_points=ladder_session.ladder_points,
            ranked_games=ladder_session.ranked_games,
            wins=ladder_session.wins,
            losses=ladder_session.losses,
            forfeits=ladder_session.forfeits,
            pending_matchmaking_id=ladder_session.pending_matchmaking_id,
            pending_opponent_id=ladder_session.pending_opponent_id,
            pending_map_id=ladder_session.pending_map_id,
        )
    )
    if result.rowcount != 1:
        raise StaleDataError(f"players row {ladder_session.player_id} does not exist")


def assign_pending_match(
    session: Session,
    *,
    matchmaking_id: int,
    player_id: int,
    opponent_id: int,
    map_id: int,
) -> None:
    """Link two players to the same pending match on one map."""
    for pid, other in ((player_id, opponent_id), (opponent_id, player_id)):
        session.execute(
            update(Player)
            .where(Player.id == pid)
            .values(
                pending_matchmaking_id=matchmaking_id,
                pending_opponent_id=other,
                pending_map_id=map_id,
            )
        )


class DatabaseIdentityResolver:
    """Resolves Battle.net identities through the characters table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def resolve(self, region: Region, subregion: int, profile_id: int) -> CharacterRecord | None:
        with self._session_factory() as session:
            character = find_character(
                session,
                region=region,
                subregion=subregion,
                profile_id=profile_id,
            )
            if character is None:
                return None
            return CharacterRecord(character_id=character.id, player_id=character.player_id)


class DatabaseSessionRegistry:
    """Builds live sessions from the players table on demand."""

    def __init__(self, session_factory: sessionmaker[Session], calculator: LadderPointCalculator) -> None:
        self._session_factory = session_factory
        self._calculator = calculator

    def lookup_live_session(self, player_id: int) -> PlayerSession | None:
        with self._session_factory() as session:
            player = session.get(Player, player_id)
            if player is None:
                return None
            return to_player_session(player, self._calculator)


__all__ = [
    "DatabaseIdentityResolver",
    "DatabaseSessionRegistry",
    "assign_pending_match",
    "find_character",
    "register_player",
    "save_player_session",
    "to_player_session",
]
