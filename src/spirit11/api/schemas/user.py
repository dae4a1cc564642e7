from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from spirit11.models import Category, UserRecord


class UserCreateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)


class TeamMemberResponse(BaseModel):
    player_id: str
    name: str
    university: str
    category: Category
    value: int


class UserResponse(BaseModel):
    user_id: str
    username: str
    budget: int
    team: List[TeamMemberResponse]
    team_size: int
    total_points: float
    created_at: datetime

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(
            user_id=user.user_id,
            username=user.username,
            budget=user.budget,
            team=[TeamMemberResponse.model_validate(member.model_dump()) for member in user.team],
            team_size=len(user.team),
            total_points=user.total_points,
            created_at=user.created_at,
        )


class BudgetSummaryResponse(BaseModel):
    initial_budget: int
    remaining: int
    spent: int
    spent_percentage: float
    team_size: int
    max_team_size: int
    team: List[TeamMemberResponse]


class TotalPointsRequest(BaseModel):
    total_points: float


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    username: str
    total_points: float
    team_size: int


class RosterRejectionResponse(BaseModel):
    reason: str
    message: str
