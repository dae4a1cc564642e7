"""Domain models."""

from .player import Category, PlayerRecord, PlayerStats, RawStats
from .user import TeamMember, UserRecord

__all__ = [
    "Category",
    "PlayerRecord",
    "PlayerStats",
    "RawStats",
    "TeamMember",
    "UserRecord",
]
