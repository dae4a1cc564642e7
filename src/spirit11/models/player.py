"""Canonical player models shared across import, roster and assistant layers."""

from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Category = Literal["Batsman", "Bowler", "All-Rounder"]


class RawStats(BaseModel):
    """Per-player counting stats as delivered by the tournament sheet."""

    total_runs: int = Field(0, ge=0)
    balls_faced: int = Field(0, ge=0)
    innings_played: int = Field(0, ge=0)
    wickets: int = Field(0, ge=0)
    overs_bowled: int = Field(0, ge=0)
    runs_conceded: int = Field(0, ge=0)

    model_config = ConfigDict(frozen=True)


class PlayerStats(RawStats):
    """Raw counters plus the figures derived from them.

    Instances are produced by :func:`spirit11.valuation.derive_stats`; the
    derived fields are never edited on their own.
    """

    batting_strike_rate: float
    batting_average: float
    bowling_strike_rate: float
    economy_rate: float
    points: float
    value: int = Field(..., ge=0)

    def raw(self) -> RawStats:
        return RawStats(**self.model_dump(include=set(RawStats.model_fields)))


class PlayerRecord(BaseModel):
    """Player document as stored in the ``players`` collection."""

    player_id: str = Field(..., min_length=1)
    name: str
    university: str
    category: Category
    stats: PlayerStats

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> int:
        return self.stats.value

    def public_dict(self) -> Dict[str, Any]:
        """Dump the record without ``points``, which end users never see."""

        return self.model_dump(exclude={"stats": {"points"}})
