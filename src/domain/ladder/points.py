"""Ladder point rules: rewards scaled by division distance."""

from __future__ import annotations

from dataclasses import dataclass

from domain.ladder.divisions import DivisionTable


@dataclass(frozen=True)
class LadderPointParameters:
    starting_points: int = 1250
    win_points_base: int = 100
    lose_points_base: int = 50
    win_points_increment: float = 25.0
    lose_points_increment: float = 12.5


@dataclass(frozen=True)
class DefeatOutcome:
    winner_pre_points: int
    winner_post_points: int
    loser_pre_points: int
    loser_post_points: int
    rank_distance: int

    @property
    def winner_delta(self) -> int:
        return self.winner_post_points - self.winner_pre_points

    @property
    def loser_delta(self) -> int:
        return self.loser_post_points - self.loser_pre_points


class LadderPointCalculator:
    """Stateless point calculator bound to one division table."""

    def __init__(self, params: LadderPointParameters, divisions: DivisionTable) -> None:
        self.params = params
        self.divisions = divisions

    def seed_points(self, points: int, ranked_games: int) -> int:
        """Players without ranked games start no lower than ``starting_points``."""
        if ranked_games <= 0:
            return max(points, self.params.starting_points)
        return points

    def process_defeat(self, *, winner_points: int, loser_points: int) -> DefeatOutcome:
        # Positive distance means the loser sits in a higher division.
        distance = self.divisions.rank_distance(winner_points, loser_points)

        gain = max(0, int(self.params.win_points_base + distance * self.params.win_points_increment))
        loss = max(0, int(self.params.lose_points_base + distance * self.params.lose_points_increment))

        return DefeatOutcome(
            winner_pre_points=winner_points,
            winner_post_points=winner_points + gain,
            loser_pre_points=loser_points,
            loser_post_points=max(0, loser_points - loss),
            rank_distance=distance,
        )

    def forfeit_penalty(self, points: int) -> int:
        """Points left after a forfeited match."""
        return max(0, points - self.params.lose_points_base)


__all__ = ["DefeatOutcome", "LadderPointCalculator", "LadderPointParameters"]
