"""User and roster snapshot models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Tuple

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from spirit11.config import INITIAL_BUDGET
from spirit11.models.player import Category, PlayerRecord


class TeamMember(BaseModel):
    """Roster entry; keeps the value paid so a refund matches the purchase."""

    player_id: str = Field(..., min_length=1)
    name: str
    university: str
    category: Category
    value: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_player(cls, player: PlayerRecord) -> "TeamMember":
        return cls(
            player_id=player.player_id,
            name=player.name,
            university=player.university,
            category=player.category,
            value=player.stats.value,
        )


class UserRecord(BaseModel):
    user_id: str = Field(..., min_length=1)
    username: str
    budget: int = Field(INITIAL_BUDGET, ge=0)
    team: Tuple[TeamMember, ...] = ()
    total_points: float = 0.0
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)

    def has_player(self, player_id: str) -> bool:
        return any(member.player_id == player_id for member in self.team)

    @property
    def team_value(self) -> int:
        return sum(member.value for member in self.team)
