"""Pure add/remove rules for a user's roster."""

from __future__ import annotations

from enum import Enum

from spirit11.config import LeagueRules, get_rules
from spirit11.models import PlayerRecord, TeamMember, UserRecord


class RosterRejection(str, Enum):
    DUPLICATE = "duplicate"
    TEAM_FULL = "team_full"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    NOT_FOUND = "not_found"


REJECTION_MESSAGES = {
    RosterRejection.DUPLICATE: "This player is already in your team!",
    RosterRejection.TEAM_FULL: "Your team is already full!",
    RosterRejection.INSUFFICIENT_BUDGET: "You don't have enough budget for this player!",
    RosterRejection.NOT_FOUND: "This player is not in your team.",
}


class RosterRuleViolation(ValueError):
    """Raised when a roster change is rejected; the user is left untouched."""

    def __init__(self, reason: RosterRejection, *, player_id: str | None = None):
        self.reason = reason
        self.player_id = player_id
        super().__init__(REJECTION_MESSAGES[reason])

    @property
    def message(self) -> str:
        return REJECTION_MESSAGES[self.reason]


def check_add(user: UserRecord, player: PlayerRecord, *, rules: LeagueRules | None = None) -> None:
    """Raise the first rule the addition breaks: duplicate, team full, then budget."""

    rules = rules or get_rules()
    if user.has_player(player.player_id):
        raise RosterRuleViolation(RosterRejection.DUPLICATE, player_id=player.player_id)
    if len(user.team) >= rules.max_team_size:
        raise RosterRuleViolation(RosterRejection.TEAM_FULL, player_id=player.player_id)
    if user.budget < player.stats.value:
        raise RosterRuleViolation(RosterRejection.INSUFFICIENT_BUDGET, player_id=player.player_id)


def add_player(user: UserRecord, player: PlayerRecord, *, rules: LeagueRules | None = None) -> UserRecord:
    check_add(user, player, rules=rules)
    member = TeamMember.from_player(player)
    return user.model_copy(
        update={
            "team": (*user.team, member),
            "budget": user.budget - member.value,
        }
    )


def remove_player(user: UserRecord, player_id: str) -> UserRecord:
    """Drop ``player_id`` from the team and refund the value paid for it."""

    member = next((m for m in user.team if m.player_id == player_id), None)
    if member is None:
        raise RosterRuleViolation(RosterRejection.NOT_FOUND, player_id=player_id)
    return user.model_copy(
        update={
            "team": tuple(m for m in user.team if m.player_id != player_id),
            "budget": user.budget + member.value,
        }
    )


def check_budget_invariant(user: UserRecord, *, rules: LeagueRules | None = None) -> bool:
    rules = rules or get_rules()
    return (
        rules.initial_budget - user.budget == user.team_value
        and len(user.team) <= rules.max_team_size
        and len({m.player_id for m in user.team}) == len(user.team)
    )
