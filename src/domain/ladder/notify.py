"""Detached stats broadcasting after a settlement."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Final

import structlog

from domain.ladder.protocol import StatsBroadcaster

log: Final = structlog.get_logger(__name__).bind(component="BackgroundNotifier")


class BackgroundNotifier:
    """Fire-and-forget fan-out of stats updates.

    Callers never observe completion or failure; failures are only logged.
    """

    def __init__(self, broadcaster: StatsBroadcaster, *, max_workers: int = 2) -> None:
        self._broadcaster = broadcaster
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ladder-notify")

    def notify(self, *player_ids: int) -> None:
        for player_id in player_ids:
            future = self._executor.submit(self._broadcaster.broadcast_stats, player_id)
            future.add_done_callback(_log_failure(player_id))

    def shutdown(self, *, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


def _log_failure(player_id: int):
    def callback(future: Future[None]) -> None:
        exc = future.exception()
        if exc is not None:
            log.error("stats broadcast failed", player_id=player_id, exc_info=exc)

    return callback


class LoggingBroadcaster:
    """Broadcaster used when no client transport is wired in."""

    def broadcast_stats(self, player_id: int) -> None:
        log.info("stats updated", player_id=player_id)


__all__ = ["BackgroundNotifier", "LoggingBroadcaster"]
