from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from spirit11.models import Category, PlayerRecord


class PlayerStatsResponse(BaseModel):
    total_runs: int
    balls_faced: int
    innings_played: int
    wickets: int
    overs_bowled: int
    runs_conceded: int
    batting_strike_rate: float
    batting_average: float
    bowling_strike_rate: float
    economy_rate: float
    value: int


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    university: str
    category: Category
    stats: PlayerStatsResponse

    @classmethod
    def from_record(cls, record: PlayerRecord) -> "PlayerResponse":
        return cls.model_validate(record.public_dict())


class CatalogSummaryResponse(BaseModel):
    total_players: int
    by_category: Dict[str, int]
    value_min: int | None
    value_max: int | None
    value_mean: float | None


class PlayerListResponse(BaseModel):
    total: int
    players: List[PlayerResponse]
