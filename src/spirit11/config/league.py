"""League configuration for supported tournament formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

CATEGORIES: Tuple[str, ...] = ("Batsman", "Bowler", "All-Rounder")
ALL_CATEGORIES = "all"

INITIAL_BUDGET = 9_000_000
MAX_TEAM_SIZE = 11
VALUE_STEP = 50_000


@dataclass(frozen=True)
class LeagueRules:
    key: str
    name: str
    initial_budget: int
    max_team_size: int
    value_step: int
    categories: Tuple[str, ...]


_LEAGUE_RULES: Dict[str, LeagueRules] = {
    "SPIRIT11": LeagueRules(
        key="SPIRIT11",
        name="Inter-University Cricket Tournament",
        initial_budget=INITIAL_BUDGET,
        max_team_size=MAX_TEAM_SIZE,
        value_step=VALUE_STEP,
        categories=CATEGORIES,
    ),
}

DEFAULT_LEAGUE = "SPIRIT11"


def iter_rules() -> Iterable[LeagueRules]:
    """Return an iterator of all configured rule sets."""

    return _LEAGUE_RULES.values()


def get_rules(key: str = DEFAULT_LEAGUE) -> LeagueRules:
    """Fetch rules for a league key, raising KeyError if missing."""

    lookup = key.upper()
    if lookup not in _LEAGUE_RULES:
        raise KeyError(f"No league rules configured for key={key!r}")
    return _LEAGUE_RULES[lookup]


def normalize_category(value: str) -> str:
    """Resolve a category label case-insensitively, raising ValueError if unknown.

    ``all`` passes through so the same helper serves catalog filters.
    """

    text = (value or "").strip()
    if text.lower() == ALL_CATEGORIES:
        return ALL_CATEGORIES
    token = text.lower().replace(" ", "").replace("_", "-")
    for category in CATEGORIES:
        if category.lower() == token:
            return category
    # "allrounder" without the hyphen shows up in hand-edited sheets
    if token == "allrounder":
        return "All-Rounder"
    raise ValueError(f"Unknown player category {value!r}; expected one of {', '.join(CATEGORIES)}")
