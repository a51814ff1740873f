"""Match result persistence."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.ladder.errors import DuplicateReplayError
from models import MatchResult, MatchResultPlayer, MatchResultSource


def count_result_sources(session: Session, replay_hash: str) -> int:
    statement = select(func.count()).select_from(MatchResultSource).where(
        MatchResultSource.replay_hash == replay_hash
    )
    return int(session.scalar(statement) or 0)


def insert_result_source(session: Session, replay_hash: str) -> MatchResultSource:
    """Claim a replay hash; the unique constraint is the duplicate signal.

    The caller must roll back its transaction on DuplicateReplayError.
    """
    source = MatchResultSource(replay_hash=replay_hash)
    session.add(source)
    try:
        session.flush()
    except IntegrityError as exc:
        raise DuplicateReplayError() from exc
    return source


def insert_match_result(
    session: Session,
    *,
    source: MatchResultSource,
    map_id: int,
    matchmaking_session_id: int | None,
    unix_timestamp: int,
) -> MatchResult:
    result = MatchResult(
        map_id=map_id,
        matchmaking_session_id=matchmaking_session_id,
        played_at=datetime.fromtimestamp(unix_timestamp, UTC).replace(tzinfo=None),
    )
    session.add(result)
    session.flush()
    source.match_id = result.id
    session.flush()
    return result


def insert_result_players(session: Session, players: list[MatchResultPlayer]) -> None:
    session.add_all(players)
    session.flush()


def fetch_match_players(session: Session, match_id: int) -> list[MatchResultPlayer]:
    statement = (
        select(MatchResultPlayer)
        .where(MatchResultPlayer.match_id == match_id)
        .order_by(MatchResultPlayer.id)
    )
    return list(session.execute(statement).scalars())


__all__ = [
    "count_result_sources",
    "fetch_match_players",
    "insert_match_result",
    "insert_result_players",
    "insert_result_source",
]
