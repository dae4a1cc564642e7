"""Configuration helpers for league rules and runtime settings."""

from .league import (
    ALL_CATEGORIES,
    CATEGORIES,
    INITIAL_BUDGET,
    MAX_TEAM_SIZE,
    VALUE_STEP,
    LeagueRules,
    get_rules,
    iter_rules,
    normalize_category,
)
from .settings import Settings

__all__ = [
    "ALL_CATEGORIES",
    "CATEGORIES",
    "INITIAL_BUDGET",
    "MAX_TEAM_SIZE",
    "VALUE_STEP",
    "LeagueRules",
    "Settings",
    "get_rules",
    "iter_rules",
    "normalize_category",
]
