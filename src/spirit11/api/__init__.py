"""REST API for the Spirit11 fantasy league."""

from __future__ import annotations

import json
import logging

from fastapi import Depends, FastAPI, File, Form, Header, HTTPException, Query, Request, UploadFile

from spirit11.assistant import AssistantBridge, build_generator
from spirit11.catalog import filter_players, summarize_catalog
from spirit11.config import ALL_CATEGORIES, LeagueRules, Settings, get_rules
from spirit11.ingest import ImportValidationError, import_players
from spirit11.models import UserRecord
from spirit11.persistence import Spirit11Store
from spirit11.roster import RosterConflictError, RosterRejection, RosterRuleViolation, RosterService

from spirit11.api.schemas import (
    AssistantReply,
    BudgetSummaryResponse,
    CatalogSummaryResponse,
    ChatRequest,
    ImportReportResponse,
    LeaderboardEntry,
    PlayerListResponse,
    PlayerResponse,
    RosterRejectionResponse,
    TeamMemberResponse,
    TotalPointsRequest,
    UserCreateRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)


def _parse_mapping(mapping_str: str | None) -> dict[str, str]:
    if not mapping_str:
        return {}
    try:
        mapping = json.loads(mapping_str)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid mapping JSON: {exc}") from exc
    if not isinstance(mapping, dict):
        raise HTTPException(status_code=400, detail="Mapping JSON must be an object")
    return {str(key): str(value) for key, value in mapping.items()}


def _rejection_to_http(exc: RosterRuleViolation) -> HTTPException:
    status = 404 if exc.reason is RosterRejection.NOT_FOUND else 409
    detail = RosterRejectionResponse(reason=exc.reason.value, message=exc.message)
    return HTTPException(status_code=status, detail=detail.model_dump())


def _budget_summary(user: UserRecord, rules: LeagueRules) -> BudgetSummaryResponse:
    spent = rules.initial_budget - user.budget
    return BudgetSummaryResponse(
        initial_budget=rules.initial_budget,
        remaining=user.budget,
        spent=spent,
        spent_percentage=round(spent / rules.initial_budget * 100, 1) if rules.initial_budget else 0.0,
        team_size=len(user.team),
        max_team_size=rules.max_team_size,
        team=[TeamMemberResponse.model_validate(member.model_dump()) for member in user.team],
    )


def create_app(
    *,
    store: Spirit11Store | None = None,
    assistant: AssistantBridge | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    rules = get_rules()
    app = FastAPI(title="Spirit11 fantasy cricket")
    store = store or Spirit11Store(settings.db_path)
    if assistant is None:
        assistant = AssistantBridge(
            build_generator(settings.gemini_api_key, settings.gemini_model),
            team_size=rules.max_team_size,
        )
    app.state.store = store
    app.state.assistant = assistant
    app.state.roster = RosterService(store, rules=rules, max_attempts=settings.max_roster_attempts)
    app.state.settings = settings

    def require_admin(request: Request, x_admin_token: str | None = Header(None)) -> None:
        expected = request.app.state.settings.admin_token
        if expected and x_admin_token != expected:
            raise HTTPException(status_code=403, detail="Admin token required")

    def fetch_user_or_404(user_id: str) -> UserRecord:
        user = store.get_user(user_id)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=PlayerListResponse)
    async def list_players(
        search: str = Query(""),
        category: str = Query(ALL_CATEGORIES),
    ) -> PlayerListResponse:
        try:
            players = filter_players(store.list_players(), search, category)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return PlayerListResponse(
            total=len(players),
            players=[PlayerResponse.from_record(player) for player in players],
        )

    @app.get("/players/summary", response_model=CatalogSummaryResponse)
    async def catalog_summary() -> CatalogSummaryResponse:
        summary = summarize_catalog(store.list_players())
        return CatalogSummaryResponse(
            total_players=summary.total_players,
            by_category=summary.by_category,
            value_min=summary.value_min,
            value_max=summary.value_max,
            value_mean=summary.value_mean,
        )

    @app.get("/players/{player_id}", response_model=PlayerResponse)
    async def get_player(player_id: str) -> PlayerResponse:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return PlayerResponse.from_record(player)

    @app.post(
        "/admin/players/import",
        response_model=ImportReportResponse,
        dependencies=[Depends(require_admin)],
    )
    async def import_players_endpoint(
        players: UploadFile = File(...),
        mapping: str | None = Form(None),
        replace: bool = Form(False),
    ) -> ImportReportResponse:
        contents = await players.read()
        if not contents:
            raise HTTPException(status_code=400, detail="players file is empty")
        try:
            text = contents.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPException(status_code=400, detail="players file must be UTF-8 text") from exc
        try:
            report = import_players(store, text, mapping=_parse_mapping(mapping) or None, replace=replace)
        except ImportValidationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return ImportReportResponse(
            total_rows=report.total_rows,
            imported_rows=report.imported_rows,
            rejected_rows=report.rejected_rows,
            replaced=replace,
        )

    @app.put(
        "/admin/users/{user_id}/points",
        response_model=UserResponse,
        dependencies=[Depends(require_admin)],
    )
    async def set_total_points(user_id: str, payload: TotalPointsRequest) -> UserResponse:
        try:
            user = store.set_total_points(user_id, payload.total_points)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail="User not found") from exc
        return UserResponse.from_record(user)

    @app.post("/users", response_model=UserResponse, status_code=201)
    async def create_user(payload: UserCreateRequest) -> UserResponse:
        try:
            user = store.create_user(payload.user_id, payload.username, budget=rules.initial_budget)
        except ValueError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        logger.info("Created user %s", user.user_id)
        return UserResponse.from_record(user)

    @app.get("/users/{user_id}", response_model=UserResponse)
    async def get_user(user_id: str) -> UserResponse:
        return UserResponse.from_record(fetch_user_or_404(user_id))

    @app.get("/users/{user_id}/budget", response_model=BudgetSummaryResponse)
    async def get_budget(user_id: str) -> BudgetSummaryResponse:
        return _budget_summary(fetch_user_or_404(user_id), rules)

    @app.post("/users/{user_id}/team/{player_id}", response_model=UserResponse)
    async def add_to_team(user_id: str, player_id: str) -> UserResponse:
        try:
            user = app.state.roster.add(user_id, player_id)
        except RosterRuleViolation as exc:
            raise _rejection_to_http(exc) from exc
        except RosterConflictError as exc:
            raise HTTPException(status_code=409, detail={"reason": "conflict", "message": str(exc)}) from exc
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0]) if exc.args else "Not found") from exc
        return UserResponse.from_record(user)

    @app.delete("/users/{user_id}/team/{player_id}", response_model=UserResponse)
    async def remove_from_team(user_id: str, player_id: str) -> UserResponse:
        try:
            user = app.state.roster.remove(user_id, player_id)
        except RosterRuleViolation as exc:
            raise _rejection_to_http(exc) from exc
        except RosterConflictError as exc:
            raise HTTPException(status_code=409, detail={"reason": "conflict", "message": str(exc)}) from exc
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc.args[0]) if exc.args else "Not found") from exc
        return UserResponse.from_record(user)

    @app.get("/leaderboard", response_model=list[LeaderboardEntry])
    async def leaderboard(limit: int = Query(20, ge=1, le=500)) -> list[LeaderboardEntry]:
        return [
            LeaderboardEntry(
                rank=index,
                user_id=user.user_id,
                username=user.username,
                total_points=user.total_points,
                team_size=len(user.team),
            )
            for index, user in enumerate(store.leaderboard(limit), start=1)
        ]

    @app.post("/assistant/chat", response_model=AssistantReply)
    async def assistant_chat(payload: ChatRequest) -> AssistantReply:
        reply = await app.state.assistant.chat(payload.message, store.list_players())
        return AssistantReply(reply=reply)

    @app.post("/assistant/suggest-team", response_model=AssistantReply)
    async def assistant_suggest_team() -> AssistantReply:
        reply = await app.state.assistant.suggest_team(store.list_players())
        return AssistantReply(reply=reply)

    return app


__all__ = ["create_app"]
