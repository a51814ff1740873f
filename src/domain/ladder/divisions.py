"""Division (tier) table and rank-distance math."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_DIVISION_NAMES = ("Bronze", "Silver", "Gold", "Platinum", "Diamond")


@dataclass(frozen=True)
class Division:
    name: str
    points: int


@dataclass(frozen=True)
class DivisionTable:
    """Ordered divisions, ascending by threshold; index 0 is the lowest."""

    divisions: tuple[Division, ...]

    def __post_init__(self) -> None:
        if not self.divisions:
            raise ValueError("A division table needs at least one division")
        for lower, upper in zip(self.divisions, self.divisions[1:]):
            if upper.points <= lower.points:
                raise ValueError(
                    f"Division thresholds must strictly increase: "
                    f"{lower.name}={lower.points} >= {upper.name}={upper.points}"
                )

    def __len__(self) -> int:
        return len(self.divisions)

    def __getitem__(self, index: int) -> Division:
        return self.divisions[index]

    def lookup(self, points: int) -> tuple[Division, int]:
        """Return the highest division whose threshold is <= points, with its index."""
        for index in range(len(self.divisions) - 1, -1, -1):
            if points >= self.divisions[index].points:
                return self.divisions[index], index
        return self.divisions[0], 0

    def rank_index(self, points: int) -> int:
        return self.lookup(points)[1]

    def rank_distance(self, points: int, other_points: int) -> int:
        """Signed number of divisions from ``points`` up to ``other_points``."""
        return self.rank_index(other_points) - self.rank_index(points)


def build_division_table(
    names: Sequence[str] = DEFAULT_DIVISION_NAMES,
    *,
    tier_count: int,
    subdivision_count: int,
    points_per_subdivision: int,
) -> DivisionTable:
    """Build ``tier_count * subdivision_count + 1`` divisions.

    Every tier but the last is split into ``subdivision_count`` bands numbered
    downwards ("Gold 5" .. "Gold 1"); the final tier is a single band without a
    numeral.
    """
    if tier_count < 0:
        raise ValueError("tier_count must be >= 0")
    if subdivision_count < 1:
        raise ValueError("subdivision_count must be >= 1")
    if points_per_subdivision < 1:
        raise ValueError("points_per_subdivision must be >= 1")
    if len(names) < tier_count + 1:
        raise ValueError(
            f"{tier_count} tiers need {tier_count + 1} division names, got {len(names)}: {list(names)}"
        )

    tier_size = points_per_subdivision * subdivision_count
    divisions: list[Division] = []
    for tier in range(tier_count):
        for band in range(subdivision_count):
            divisions.append(
                Division(
                    name=f"{names[tier]} {subdivision_count - band}",
                    points=tier_size * tier + points_per_subdivision * band,
                )
            )
    divisions.append(Division(name=names[tier_count], points=tier_size * tier_count))
    return DivisionTable(tuple(divisions))


__all__ = ["DEFAULT_DIVISION_NAMES", "Division", "DivisionTable", "build_division_table"]
