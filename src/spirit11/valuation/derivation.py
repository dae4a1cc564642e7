"""Convert raw counting stats into rates, points and market value."""

from __future__ import annotations

import math
from typing import Callable

from spirit11.config import VALUE_STEP
from spirit11.models import PlayerStats, RawStats

BALLS_PER_OVER = 6

BATTING_STRIKE_RATE_DIVISOR = 5.0
BATTING_AVERAGE_WEIGHT = 0.8
BOWLING_STRIKE_RATE_NUMERATOR = 500.0
ECONOMY_NUMERATOR = 140.0

VALUE_POINTS_MULTIPLIER = 9
VALUE_POINTS_OFFSET = 100
VALUE_SCALE = 1000


def _guarded(compute: Callable[[], float]) -> float:
    """Evaluate ``compute``; a zero denominator or non-finite result yields 0."""

    try:
        value = compute()
    except ZeroDivisionError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def batting_strike_rate(raw: RawStats) -> float:
    return _guarded(lambda: raw.total_runs / raw.balls_faced * 100)


def batting_average(raw: RawStats) -> float:
    return _guarded(lambda: raw.total_runs / raw.innings_played)


def bowling_strike_rate(raw: RawStats) -> float:
    return _guarded(lambda: (raw.overs_bowled * BALLS_PER_OVER) / raw.wickets)


def economy_rate(raw: RawStats) -> float:
    return _guarded(
        lambda: raw.runs_conceded / (raw.overs_bowled * BALLS_PER_OVER) * BALLS_PER_OVER
    )


def compute_points(
    strike_rate: float,
    average: float,
    bowling_sr: float,
    economy: float,
) -> float:
    """Combine the four rates into the composite score.

    Each inverse term falls to 0 on its own when its rate is 0, so a bowler
    who conceded no runs keeps the strike-rate term. Without a bowling strike
    rate (no wickets) the economy term is dropped as well, leaving a batsman
    who bowled a few wicketless overs with the batting term only.
    """

    batting = _guarded(lambda: strike_rate / BATTING_STRIKE_RATE_DIVISOR + average * BATTING_AVERAGE_WEIGHT)
    strike_term = _guarded(lambda: BOWLING_STRIKE_RATE_NUMERATOR / bowling_sr)
    economy_term = _guarded(lambda: ECONOMY_NUMERATOR / economy) if strike_term else 0.0
    return _guarded(lambda: batting + strike_term + economy_term)


def compute_value(points: float, *, step: int = VALUE_STEP) -> int:
    """Price a player from points, rounded half-up to the nearest ``step``."""

    raw_value = (VALUE_POINTS_MULTIPLIER * points + VALUE_POINTS_OFFSET) * VALUE_SCALE
    units = math.floor(raw_value / step + 0.5)
    return max(0, int(units) * step)


def derive_stats(raw: RawStats) -> PlayerStats:
    strike_rate = batting_strike_rate(raw)
    average = batting_average(raw)
    bowling_sr = bowling_strike_rate(raw)
    economy = economy_rate(raw)
    points = compute_points(strike_rate, average, bowling_sr, economy)
    return PlayerStats(
        **raw.model_dump(),
        batting_strike_rate=strike_rate,
        batting_average=average,
        bowling_strike_rate=bowling_sr,
        economy_rate=economy,
        points=points,
        value=compute_value(points),
    )


def recompute(stats: PlayerStats) -> PlayerStats:
    return derive_stats(stats.raw())


def is_consistent(stats: PlayerStats) -> bool:
    """True when the stored derived figures match a fresh derivation."""

    return recompute(stats) == stats
