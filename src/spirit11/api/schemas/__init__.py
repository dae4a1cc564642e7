"""Pydantic models for API I/O."""

from .assistant import AssistantReply, ChatRequest
from .importing import ImportReportResponse
from .player import CatalogSummaryResponse, PlayerListResponse, PlayerResponse, PlayerStatsResponse
from .user import (
    BudgetSummaryResponse,
    LeaderboardEntry,
    RosterRejectionResponse,
    TeamMemberResponse,
    TotalPointsRequest,
    UserCreateRequest,
    UserResponse,
)

__all__ = [
    "AssistantReply",
    "BudgetSummaryResponse",
    "CatalogSummaryResponse",
    "ChatRequest",
    "ImportReportResponse",
    "LeaderboardEntry",
    "PlayerListResponse",
    "PlayerResponse",
    "PlayerStatsResponse",
    "RosterRejectionResponse",
    "TeamMemberResponse",
    "TotalPointsRequest",
    "UserCreateRequest",
    "UserResponse",
]
