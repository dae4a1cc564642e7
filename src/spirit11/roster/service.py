"""Store-backed roster changes with optimistic concurrency."""

from __future__ import annotations

import logging
from typing import Callable

from spirit11.config import LeagueRules, get_rules
from spirit11.config.settings import DEFAULT_ROSTER_ATTEMPTS
from spirit11.models import UserRecord
from spirit11.persistence import Spirit11Store

from .rules import add_player, remove_player

logger = logging.getLogger(__name__)


class RosterConflictError(RuntimeError):
    """Raised when concurrent writers keep invalidating the snapshot."""


class RosterService:
    def __init__(
        self,
        store: Spirit11Store,
        *,
        rules: LeagueRules | None = None,
        max_attempts: int = DEFAULT_ROSTER_ATTEMPTS,
    ):
        self.store = store
        self.rules = rules or get_rules()
        self.max_attempts = max(1, max_attempts)

    def _load_user(self, user_id: str) -> UserRecord:
        user = self.store.get_user(user_id)
        if user is None:
            raise KeyError(f"User {user_id} not found")
        return user

    def _commit(self, user_id: str, change: Callable[[UserRecord], UserRecord]) -> UserRecord:
        for attempt in range(1, self.max_attempts + 1):
            current = self._load_user(user_id)
            # Rule violations propagate from here without touching the store.
            updated = change(current)
            if self.store.update_roster(
                user_id,
                team=updated.team,
                budget=updated.budget,
                expected_version=current.version,
            ):
                return updated.model_copy(update={"version": current.version + 1})
            logger.info(
                "Roster write for %s lost a race on version %s (attempt %s/%s)",
                user_id,
                current.version,
                attempt,
                self.max_attempts,
            )
        raise RosterConflictError(
            f"Roster for user {user_id} changed concurrently {self.max_attempts} times; try again"
        )

    def add(self, user_id: str, player_id: str) -> UserRecord:
        player = self.store.get_player(player_id)
        if player is None:
            raise KeyError(f"Player {player_id} not found")
        user = self._commit(user_id, lambda current: add_player(current, player, rules=self.rules))
        logger.info("User %s added %s for %s", user_id, player_id, player.stats.value)
        return user

    def remove(self, user_id: str, player_id: str) -> UserRecord:
        user = self._commit(user_id, lambda current: remove_player(current, player_id))
        logger.info("User %s removed %s", user_id, player_id)
        return user
