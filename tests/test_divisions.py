"""Unit tests for the division table."""

from __future__ import annotations

import pytest

from domain.ladder.divisions import DivisionTable, build_division_table


def test_table_has_expected_size_and_names(division_table: DivisionTable) -> None:
    assert len(division_table) == 4 * 5 + 1
    assert division_table[0].name == "Bronze 5"
    assert division_table[4].name == "Bronze 1"
    assert division_table[5].name == "Silver 5"
    assert division_table[len(division_table) - 1].name == "Diamond"
    assert division_table[len(division_table) - 1].points == 2000


@pytest.mark.parametrize(
    ("tier_count", "subdivision_count", "points"),
    [(0, 1, 1), (1, 1, 50), (4, 5, 100), (3, 2, 250)],
)
def test_thresholds_strictly_increase(tier_count: int, subdivision_count: int, points: int) -> None:
    table = build_division_table(
        tier_count=tier_count,
        subdivision_count=subdivision_count,
        points_per_subdivision=points,
    )
    thresholds = [division.points for division in table.divisions]
    assert thresholds == sorted(set(thresholds))
    assert table.lookup(0)[1] == 0


def test_lookup_is_inclusive_at_every_threshold(division_table: DivisionTable) -> None:
    for index, division in enumerate(division_table.divisions):
        assert division_table.lookup(division.points) == (division, index)


def test_lookup_between_thresholds_uses_lower_division(division_table: DivisionTable) -> None:
    division, index = division_table.lookup(1299)
    assert division.name == "Gold 3"
    assert index == 12


def test_points_below_every_threshold_fall_into_lowest_division(division_table: DivisionTable) -> None:
    assert division_table.lookup(-500) == (division_table[0], 0)


def test_points_above_top_threshold_stay_in_top_division(division_table: DivisionTable) -> None:
    assert division_table.rank_index(99_999) == len(division_table) - 1


def test_rank_distance_is_antisymmetric(division_table: DivisionTable) -> None:
    samples = (0, 150, 480, 1250, 1999, 2000, 5000)
    for a in samples:
        for b in samples:
            assert division_table.rank_distance(a, b) == -division_table.rank_distance(b, a)


def test_rank_distance_counts_divisions(division_table: DivisionTable) -> None:
    assert division_table.rank_distance(1250, 1250) == 0
    assert division_table.rank_distance(1250, 1500) == 3
    assert division_table.rank_distance(1500, 1000) == -5


def test_too_few_names_is_a_construction_error() -> None:
    with pytest.raises(ValueError, match="need 5 division names"):
        build_division_table(
            ("Bronze", "Silver", "Gold", "Platinum"),
            tier_count=4,
            subdivision_count=5,
            points_per_subdivision=100,
        )


def test_invalid_subdivision_count_is_rejected() -> None:
    with pytest.raises(ValueError, match="subdivision_count"):
        build_division_table(tier_count=2, subdivision_count=0, points_per_subdivision=100)
