"""Player catalog utilities (search, filtering, summaries)."""

from .filtering import CatalogQuery, CatalogSummary, filter_players, summarize_catalog

__all__ = [
    "CatalogQuery",
    "CatalogSummary",
    "filter_players",
    "summarize_catalog",
]
