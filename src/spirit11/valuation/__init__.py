"""Stat derivation: raw counters to rates, points and value."""

from .derivation import (
    batting_average,
    batting_strike_rate,
    bowling_strike_rate,
    compute_points,
    compute_value,
    derive_stats,
    economy_rate,
    is_consistent,
    recompute,
)

__all__ = [
    "batting_average",
    "batting_strike_rate",
    "bowling_strike_rate",
    "compute_points",
    "compute_value",
    "derive_stats",
    "economy_rate",
    "is_consistent",
    "recompute",
]
