"""Validate a submitted game record and settle it exactly once."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Final

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.ladder.errors import (
    ClientNotInvolvedError,
    DuplicateReplayError,
    GameTooShortError,
    InvalidFormatError,
    InvalidMapError,
    InvalidParticipantsError,
    LadderError,
    PlayerNotFoundError,
    StorageError,
    WrongMapError,
    WrongOpponentError,
)
from domain.ladder.locks import PairLockCoordinator
from domain.ladder.map_pool import LadderMap, MapPool, parse_region
from domain.ladder.notify import BackgroundNotifier
from domain.ladder.participants import ResolvedParticipant, resolve_participant
from domain.ladder.protocol import IdentityResolver, LadderSession, SessionRegistry
from domain.ladder.replay import ParsedReplay
from models import MatchResult, MatchResultPlayer
from repositories.ladder.players import save_player_session
from repositories.ladder.results import (
    count_result_sources,
    insert_match_result,
    insert_result_players,
    insert_result_source,
)

MIN_GAME_LENGTH = 120

log: Final = structlog.get_logger(__name__).bind(component="MatchResultPipeline")


@dataclass(frozen=True)
class SettledMatch:
    """Persisted outcome: the match header plus (submitter, opponent) rows."""

    result: MatchResult
    players: tuple[MatchResultPlayer, MatchResultPlayer]


class MatchResultPipeline:
    """Turns an untrusted game record into a settled ladder result.

    Only the victor's submission settles a match; the loser's copy is accepted
    and ignored. Everything from the victor check to the final commit runs
    under the pairwise lock of the two players.
    """

    def __init__(
        self,
        *,
        session_factory: sessionmaker[Session],
        map_pool: MapPool,
        sessions: SessionRegistry,
        identities: IdentityResolver,
        locks: PairLockCoordinator,
        notifier: BackgroundNotifier,
        min_game_length: int = MIN_GAME_LENGTH,
    ) -> None:
        self._session_factory = session_factory
        self._map_pool = map_pool
        self._sessions = sessions
        self._identities = identities
        self._locks = locks
        self._notifier = notifier
        self.min_game_length = min_game_length

    def submit(self, replay: ParsedReplay, submitter_id: int) -> SettledMatch | None:
        """Validate and settle ``replay`` on behalf of ``submitter_id``.

        Returns None when the submitter lost; raises a LadderError subclass on
        rejection.
        """
        bound = log.bind(player_id=submitter_id, replay_hash=replay.file_hash)
        try:
            settled = self._submit(replay, submitter_id)
        except LadderError as exc:
            bound.info("submission rejected", reason=type(exc).__name__)
            raise

        if settled is None:
            bound.info("submission accepted without settlement", reason="submitter lost")
        else:
            bound.info(
                "match settled",
                match_id=settled.result.id,
                map_id=settled.result.map_id,
                opponent_id=settled.players[1].player_id,
                points_delta=settled.players[0].points_delta,
            )
        return settled

    def forfeit_pending_match(self, ladder_session: LadderSession) -> bool:
        """Forfeit the session's pending match and persist it immediately."""
        snapshot = ladder_session.snapshot()
        if not ladder_session.forfeit_pending_match():
            return False

        try:
            with self._storage(), self._session_factory() as db:
                save_player_session(db, ladder_session)
                db.commit()
        except StorageError:
            ladder_session.restore(snapshot)
            raise

        log.info(
            "pending match forfeited",
            player_id=ladder_session.player_id,
            ladder_points=ladder_session.ladder_points,
        )
        return True

    def _submit(self, replay: ParsedReplay, submitter_id: int) -> SettledMatch | None:
        if replay.game_length < self.min_game_length:
            raise GameTooShortError()

        ladder_map = self._map_pool.resolve(parse_region(replay.region), replay.map_name)
        if ladder_map is None or not ladder_map.in_ranked_pool:
            raise InvalidMapError()

        if replay.observers or len(replay.players) != 2:
            raise InvalidFormatError()

        with self._storage(), self._session_factory() as db:
            if count_result_sources(db, replay.file_hash) > 0:
                raise DuplicateReplayError()

        player, opponent = self._resolve_participants(replay, submitter_id)

        if player.victory == opponent.victory:
            raise InvalidFormatError()

        with self._locks.hold(player.player_id, opponent.player_id):
            return self._settle(replay, ladder_map, player, opponent)

    def _resolve_participants(
        self,
        replay: ParsedReplay,
        submitter_id: int,
    ) -> tuple[ResolvedParticipant, ResolvedParticipant]:
        resolved: list[ResolvedParticipant] = []
        for participant in replay.players:
            entry = resolve_participant(participant, self._identities)
            if entry is None:
                raise InvalidParticipantsError()
            resolved.append(entry)

        mine = [entry for entry in resolved if entry.player_id == submitter_id]
        theirs = [entry for entry in resolved if entry.player_id != submitter_id]
        if len(mine) != 1:
            raise ClientNotInvolvedError()
        if len(theirs) != 1:
            raise InvalidParticipantsError()
        return mine[0], theirs[0]

    def _settle(
        self,
        replay: ParsedReplay,
        ladder_map: LadderMap,
        player: ResolvedParticipant,
        opponent: ResolvedParticipant,
    ) -> SettledMatch | None:
        if not player.victory:
            return None

        # A concurrent copy may have settled while this one waited on the lock.
        with self._storage(), self._session_factory() as db:
            if count_result_sources(db, replay.file_hash) > 0:
                raise DuplicateReplayError()

        submitter = self._sessions.lookup_live_session(player.player_id)
        opponent_session = self._sessions.lookup_live_session(opponent.player_id)
        if submitter is None or opponent_session is None:
            raise PlayerNotFoundError()

        if not submitter.is_matched_with(opponent_session):
            self.forfeit_pending_match(submitter)
            raise WrongOpponentError()

        if not opponent_session.is_matched_with(submitter):
            # Desync fix-up only; the submitter's result still stands.
            self.forfeit_pending_match(opponent_session)

        if not submitter.is_on_map(ladder_map.id):
            raise WrongMapError()

        snapshots = (submitter.snapshot(), opponent_session.snapshot())
        try:
            settled = self._persist(replay, ladder_map, player, opponent, submitter, opponent_session)
        except Exception:
            submitter.restore(snapshots[0])
            opponent_session.restore(snapshots[1])
            raise

        self._notifier.notify(submitter.player_id, opponent_session.player_id)
        return settled

    def _persist(
        self,
        replay: ParsedReplay,
        ladder_map: LadderMap,
        player: ResolvedParticipant,
        opponent: ResolvedParticipant,
        submitter: LadderSession,
        opponent_session: LadderSession,
    ) -> SettledMatch:
        with self._storage(), self._session_factory() as db:
            try:
                source = insert_result_source(db, replay.file_hash)
                result = insert_match_result(
                    db,
                    source=source,
                    map_id=ladder_map.id,
                    matchmaking_session_id=submitter.pending_matchmaking_id,
                    unix_timestamp=replay.unix_timestamp,
                )

                points_before = (submitter.ladder_points, opponent_session.ladder_points)
                outcome = submitter.apply_defeat_against(opponent_session)

                submitter.clear_pending_match()
                opponent_session.clear_pending_match()
                save_player_session(db, submitter)
                save_player_session(db, opponent_session)

                rows = (
                    _result_row(result, player, points_before[0], outcome.winner_post_points),
                    _result_row(result, opponent, points_before[1], outcome.loser_post_points),
                )
                insert_result_players(db, list(rows))
                db.commit()
            except Exception:
                db.rollback()
                raise

        return SettledMatch(result=result, players=rows)

    @contextmanager
    def _storage(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            log.exception("ladder storage failure")
            raise StorageError() from exc


def _result_row(
    result: MatchResult,
    participant: ResolvedParticipant,
    points_before: int,
    points_after: int,
) -> MatchResultPlayer:
    return MatchResultPlayer(
        match_id=result.id,
        player_id=participant.player_id,
        character_id=participant.character_id,
        points_before=points_before,
        points_after=points_after,
        points_delta=points_after - points_before,
        race=participant.race,
        victory=participant.victory,
    )


__all__ = ["MIN_GAME_LENGTH", "MatchResultPipeline", "SettledMatch"]
