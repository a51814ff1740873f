"""In-process ladder session state for one player."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from domain.ladder.points import DefeatOutcome, LadderPointCalculator


@dataclass
class PlayerSession:
    """Mutable ladder state; persistence is the caller's job."""

    player_id: int
    calculator: LadderPointCalculator = field(repr=False)
    ladder_points: int = 0
    ranked_games: int = 0
    wins: int = 0
    losses: int = 0
    forfeits: int = 0
    pending_matchmaking_id: int | None = None
    pending_opponent_id: int | None = None
    pending_map_id: int | None = None

    def is_matched_with(self, other: PlayerSession) -> bool:
        return self.pending_matchmaking_id is not None and self.pending_opponent_id == other.player_id

    def is_on_map(self, map_id: int) -> bool:
        return self.pending_map_id == map_id

    def clear_pending_match(self) -> None:
        self.pending_matchmaking_id = None
        self.pending_opponent_id = None
        self.pending_map_id = None

    def forfeit_pending_match(self) -> bool:
        """Abandon the pending match, paying the flat loss penalty.

        Returns False when there was nothing pending to forfeit.
        """
        if self.pending_matchmaking_id is None:
            return False
        self.clear_pending_match()
        self.ladder_points = self.calculator.forfeit_penalty(self.ladder_points)
        self.forfeits += 1
        return True

    def apply_defeat_against(self, other: PlayerSession) -> DefeatOutcome:
        """Settle a win of this player over ``other``, mutating both sessions."""
        self.ladder_points = self.calculator.seed_points(self.ladder_points, self.ranked_games)
        other.ladder_points = self.calculator.seed_points(other.ladder_points, other.ranked_games)

        outcome = self.calculator.process_defeat(
            winner_points=self.ladder_points,
            loser_points=other.ladder_points,
        )
        self.ladder_points = outcome.winner_post_points
        other.ladder_points = outcome.loser_post_points
        self.ranked_games += 1
        other.ranked_games += 1
        self.wins += 1
        other.losses += 1
        return outcome

    def snapshot(self) -> PlayerSession:
        return replace(self)

    def restore(self, snapshot: PlayerSession) -> None:
        """Roll the mutable fields back to an earlier snapshot."""
        self.ladder_points = snapshot.ladder_points
        self.ranked_games = snapshot.ranked_games
        self.wins = snapshot.wins
        self.losses = snapshot.losses
        self.forfeits = snapshot.forfeits
        self.pending_matchmaking_id = snapshot.pending_matchmaking_id
        self.pending_opponent_id = snapshot.pending_opponent_id
        self.pending_map_id = snapshot.pending_map_id


__all__ = ["PlayerSession"]
