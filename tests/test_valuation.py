import math

import pytest

from spirit11.models import RawStats
from spirit11.valuation import (
    batting_strike_rate,
    bowling_strike_rate,
    compute_points,
    compute_value,
    derive_stats,
    economy_rate,
    is_consistent,
    recompute,
)


def test_batsman_without_wickets_scores_batting_term_only():
    stats = derive_stats(
        RawStats(
            total_runs=530,
            balls_faced=588,
            innings_played=10,
            wickets=0,
            overs_bowled=3,
            runs_conceded=21,
        )
    )

    assert stats.batting_strike_rate == pytest.approx(90.136, abs=1e-3)
    assert stats.batting_average == pytest.approx(53.0)
    assert stats.bowling_strike_rate == 0
    assert stats.economy_rate == pytest.approx(7.0)
    assert stats.points == pytest.approx(530 / 588 * 100 / 5 + 53 * 0.8)
    assert stats.value == 650_000


def test_bowler_without_batting_scores_bowling_term_only():
    stats = derive_stats(RawStats(wickets=10, overs_bowled=20, runs_conceded=150))

    assert stats.batting_strike_rate == 0
    assert stats.batting_average == 0
    assert stats.bowling_strike_rate == pytest.approx(12.0)
    assert stats.economy_rate == pytest.approx(7.5)
    assert stats.points == pytest.approx(500 / 12 + 140 / 7.5)
    assert stats.value == 650_000


def test_new_player_has_zero_rates_and_floor_value():
    stats = derive_stats(RawStats())

    assert stats.batting_strike_rate == 0
    assert stats.batting_average == 0
    assert stats.bowling_strike_rate == 0
    assert stats.economy_rate == 0
    assert stats.points == 0
    assert stats.value == 100_000


def test_zero_runs_conceded_keeps_strike_rate_term():
    # economy of 0 drops only 140 / economy
    points = compute_points(strike_rate=0.0, average=0.0, bowling_sr=12.0, economy=0.0)
    assert points == pytest.approx(500 / 12)

    stats = derive_stats(RawStats(wickets=5, overs_bowled=10, runs_conceded=0))
    assert stats.bowling_strike_rate == pytest.approx(12.0)
    assert stats.economy_rate == 0
    assert stats.points == pytest.approx(41.667, abs=1e-3)
    assert stats.value == 500_000


def test_no_wickets_drops_economy_term_too():
    points = compute_points(strike_rate=50.0, average=20.0, bowling_sr=0.0, economy=7.0)
    assert points == pytest.approx(50 / 5 + 20 * 0.8)


def test_rate_guards():
    raw = RawStats(total_runs=50, balls_faced=0, wickets=0, overs_bowled=0, runs_conceded=10)
    assert batting_strike_rate(raw) == 0
    assert bowling_strike_rate(raw) == 0
    assert economy_rate(raw) == 0


def test_points_never_non_finite():
    assert compute_points(math.inf, 0.0, 0.0, 0.0) == 0
    assert compute_points(math.nan, 10.0, 12.0, 7.0) == pytest.approx(500 / 12 + 140 / 7)


def test_compute_value_rounds_half_up():
    # (9 * 25 + 100) * 1000 / 50000 == 6.5
    assert compute_value(25.0) == 350_000
    assert compute_value(24.9) == 300_000


def test_compute_value_is_non_negative_multiple_of_step():
    for points in (0.0, 1.3, 17.77, 60.4, 142.9, 1000.0):
        value = compute_value(points)
        assert value >= 0
        assert value % 50_000 == 0


def test_derivation_is_deterministic_and_consistent():
    raw = RawStats(total_runs=412, balls_faced=333, innings_played=9, wickets=7, overs_bowled=31, runs_conceded=211)
    first = derive_stats(raw)

    assert derive_stats(raw) == first
    assert recompute(first) == first
    assert is_consistent(first)
    assert not is_consistent(first.model_copy(update={"value": first.value + 50_000}))
