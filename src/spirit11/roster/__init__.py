"""Roster rules and the store-backed roster service."""

from .rules import (
    REJECTION_MESSAGES,
    RosterRejection,
    RosterRuleViolation,
    add_player,
    check_add,
    check_budget_invariant,
    remove_player,
)
from .service import RosterConflictError, RosterService

__all__ = [
    "REJECTION_MESSAGES",
    "RosterConflictError",
    "RosterRejection",
    "RosterRuleViolation",
    "RosterService",
    "add_player",
    "check_add",
    "check_budget_invariant",
    "remove_player",
]
