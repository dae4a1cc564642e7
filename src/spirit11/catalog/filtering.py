"""Helpers for searching and slicing the player catalog."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean
from typing import Iterable, Sequence

from spirit11.config import ALL_CATEGORIES, CATEGORIES, normalize_category
from spirit11.models import PlayerRecord


@dataclass(frozen=True)
class CatalogQuery:
    """Free-text search plus category filter for the catalog."""

    search_term: str = ""
    category: str = ALL_CATEGORIES

    @classmethod
    def build(cls, search_term: str | None = None, category: str | None = None) -> "CatalogQuery":
        resolved = normalize_category(category) if category else ALL_CATEGORIES
        return cls(search_term=search_term or "", category=resolved)


@dataclass(frozen=True)
class CatalogSummary:
    """Aggregate figures for a catalog selection."""

    total_players: int
    by_category: dict[str, int]
    value_min: int | None
    value_max: int | None
    value_mean: float | None


def _matches(player: PlayerRecord, query: CatalogQuery) -> bool:
    needle = query.search_term.lower()
    if needle and needle not in player.name.lower() and needle not in player.university.lower():
        return False
    if query.category != ALL_CATEGORIES and player.category != query.category:
        return False
    return True


def filter_players(
    players: Sequence[PlayerRecord],
    search_term: str = "",
    category: str = ALL_CATEGORIES,
) -> list[PlayerRecord]:
    """Return matching players in their original order."""

    query = CatalogQuery.build(search_term, category)
    return [player for player in players if _matches(player, query)]


def summarize_catalog(players: Iterable[PlayerRecord]) -> CatalogSummary:
    player_list = list(players)
    by_category = {category: 0 for category in CATEGORIES}
    for player in player_list:
        by_category[player.category] = by_category.get(player.category, 0) + 1

    values = [player.stats.value for player in player_list]
    return CatalogSummary(
        total_players=len(player_list),
        by_category=by_category,
        value_min=min(values) if values else None,
        value_max=max(values) if values else None,
        value_mean=fmean(values) if values else None,
    )


__all__ = [
    "CatalogQuery",
    "CatalogSummary",
    "filter_players",
    "summarize_catalog",
]
