"""Shared fixtures: in-memory SQLite ladder with two matched players."""

from __future__ import annotations

import threading
from dataclasses import dataclass

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db import create_session_factory, ensure_schema
from domain.ladder.divisions import DivisionTable, build_division_table
from domain.ladder.locks import PairLockCoordinator
from domain.ladder.map_pool import LadderMap, MapPool, Region
from domain.ladder.notify import BackgroundNotifier
from domain.ladder.pipeline import MatchResultPipeline
from domain.ladder.points import LadderPointCalculator, LadderPointParameters
from domain.ladder.replay import ParsedReplay, ReplayParticipant
from repositories.ladder.maps import sync_maps
from repositories.ladder.players import (
    DatabaseIdentityResolver,
    DatabaseSessionRegistry,
    assign_pending_match,
    register_player,
)

RANKED_NA_MAP = LadderMap(id=3, region=Region.NA, battle_net_name="Starbow - Fighting Spirit", in_ranked_pool=True)
OTHER_NA_MAP = LadderMap(id=4, region=Region.NA, battle_net_name="Starbow - Circuit breaker", in_ranked_pool=True)
UNRANKED_NA_MAP = LadderMap(id=2, region=Region.NA, battle_net_name="Frost LE", in_ranked_pool=False)
EU_MAP = LadderMap(id=1, region=Region.EU, battle_net_name="Starbow - Texas 3.0", in_ranked_pool=True)
TEST_MAPS = (EU_MAP, UNRANKED_NA_MAP, RANKED_NA_MAP, OTHER_NA_MAP)

ALICE_URL = "http://us.battle.net/sc2/en/profile/1001/1/Alice/"
BOB_URL = "http://us.battle.net/sc2/en/profile/1002/1/Bob/"
CAROL_URL = "http://us.battle.net/sc2/en/profile/1003/1/Carol/"
STRANGER_URL = "http://us.battle.net/sc2/en/profile/9999/1/Stranger/"


class RecordingBroadcaster:
    def __init__(self) -> None:
        self.player_ids: list[int] = []
        self._lock = threading.Lock()

    def broadcast_stats(self, player_id: int) -> None:
        with self._lock:
            self.player_ids.append(player_id)


@dataclass
class LadderHarness:
    session_factory: sessionmaker[Session]
    pipeline: MatchResultPipeline
    notifier: BackgroundNotifier
    broadcaster: RecordingBroadcaster
    alice_id: int
    bob_id: int
    carol_id: int


@pytest.fixture
def division_table() -> DivisionTable:
    return build_division_table(tier_count=4, subdivision_count=5, points_per_subdivision=100)


@pytest.fixture
def calculator(division_table: DivisionTable) -> LadderPointCalculator:
    return LadderPointCalculator(LadderPointParameters(), division_table)


@pytest.fixture
def engine() -> Engine:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )
    ensure_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


def build_ladder(session_factory: sessionmaker[Session], calculator: LadderPointCalculator) -> LadderHarness:
    """Seed Alice, Bob and Carol; Alice and Bob share pending match 77 on the ranked NA map."""
    with session_factory() as session:
        sync_maps(session, TEST_MAPS)
        alice, _ = register_player(
            session, name="Alice", region=Region.NA, subregion=1, profile_id=1001, ladder_points=1250
        )
        bob, _ = register_player(
            session, name="Bob", region=Region.NA, subregion=1, profile_id=1002, ladder_points=1250
        )
        carol, _ = register_player(
            session, name="Carol", region=Region.NA, subregion=1, profile_id=1003, ladder_points=1250
        )
        for player in (alice, bob, carol):
            player.ranked_games = 10
        assign_pending_match(
            session,
            matchmaking_id=77,
            player_id=alice.id,
            opponent_id=bob.id,
            map_id=RANKED_NA_MAP.id,
        )
        session.commit()
        ids = (alice.id, bob.id, carol.id)

    broadcaster = RecordingBroadcaster()
    notifier = BackgroundNotifier(broadcaster)
    pipeline = MatchResultPipeline(
        session_factory=session_factory,
        map_pool=MapPool(TEST_MAPS),
        sessions=DatabaseSessionRegistry(session_factory, calculator),
        identities=DatabaseIdentityResolver(session_factory),
        locks=PairLockCoordinator(),
        notifier=notifier,
    )
    return LadderHarness(session_factory, pipeline, notifier, broadcaster, *ids)


@pytest.fixture
def ladder(session_factory: sessionmaker[Session], calculator: LadderPointCalculator) -> LadderHarness:
    harness = build_ladder(session_factory, calculator)
    yield harness
    harness.notifier.shutdown(wait=True)


def make_replay(
    *,
    winner_url: str = ALICE_URL,
    loser_url: str = BOB_URL,
    map_name: str = RANKED_NA_MAP.battle_net_name,
    region: str = "US",
    game_length: int = 600,
    file_hash: str = "hash-1",
    extra_players: tuple[ReplayParticipant, ...] = (),
    observers: tuple[str, ...] = (),
    winner_result: str = "Win",
    loser_result: str = "Loss",
) -> ParsedReplay:
    return ParsedReplay(
        region=region,
        map_name=map_name,
        game_length=game_length,
        players=(
            ReplayParticipant(name="Winner", profile_url=winner_url, race="Protoss", result=winner_result),
            ReplayParticipant(name="Loser", profile_url=loser_url, race="Zerg", result=loser_result),
            *extra_players,
        ),
        observers=observers,
        file_hash=file_hash,
        unix_timestamp=1_700_000_000,
    )
