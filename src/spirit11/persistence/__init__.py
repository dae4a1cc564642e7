"""Persistence layer for the players and users collections."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from spirit11.config import INITIAL_BUDGET
from spirit11.models import PlayerRecord, PlayerStats, TeamMember, UserRecord

logger = logging.getLogger(__name__)


class Spirit11Store:
    """Simple SQLite-backed document store for players and users."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    university TEXT NOT NULL,
                    category TEXT NOT NULL,
                    stats_json TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    username TEXT NOT NULL,
                    budget INTEGER NOT NULL,
                    team_json TEXT NOT NULL,
                    total_points REAL NOT NULL DEFAULT 0,
                    version INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    # -- players -----------------------------------------------------------

    def save_players(self, records: Iterable[PlayerRecord], *, replace: bool = False) -> int:
        now = datetime.now(timezone.utc).isoformat()
        rows = [
            (
                record.player_id,
                record.name,
                record.university,
                record.category,
                record.stats.model_dump_json(),
                now,
            )
            for record in records
        ]
        with self._connect() as conn:
            if replace:
                conn.execute("DELETE FROM players")
            conn.executemany(
                """
                INSERT OR REPLACE INTO players (id, name, university, category, stats_json, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
        logger.info("Stored %s players (replace=%s)", len(rows), replace)
        return len(rows)

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM players WHERE id = ?", (player_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_player(row)

    def list_players(self) -> List[PlayerRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM players ORDER BY rowid").fetchall()
        return [self._row_to_player(row) for row in rows]

    def clear_players(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM players")
            conn.commit()

    # -- users -------------------------------------------------------------

    def create_user(self, user_id: str, username: str, *, budget: int = INITIAL_BUDGET) -> UserRecord:
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO users (id, username, budget, team_json, total_points, version, created_at, updated_at)
                    VALUES (?, ?, ?, ?, 0, 0, ?, ?)
                    """,
                    (user_id, username, budget, "[]", now, now),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise ValueError(f"User {user_id} already exists") from exc
        user = self.get_user(user_id)
        if user is None:  # pragma: no cover
            raise KeyError(f"User {user_id} not found after insert")
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    def list_users(self) -> List[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM users ORDER BY datetime(created_at)").fetchall()
        return [self._row_to_user(row) for row in rows]

    def update_roster(
        self,
        user_id: str,
        *,
        team: Sequence[TeamMember],
        budget: int,
        expected_version: int,
    ) -> bool:
        """Write team and budget together if the stored version still matches.

        Returns False when another writer got there first.
        """

        now = datetime.now(timezone.utc).isoformat()
        team_json = json.dumps([member.model_dump() for member in team])
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE users
                SET team_json = ?, budget = ?, version = version + 1, updated_at = ?
                WHERE id = ? AND version = ?
                """,
                (team_json, budget, now, user_id, expected_version),
            )
            conn.commit()
            return cursor.rowcount == 1

    def set_total_points(self, user_id: str, total_points: float) -> UserRecord:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE users SET total_points = ?, updated_at = ? WHERE id = ?",
                (float(total_points), now, user_id),
            )
            conn.commit()
            if cursor.rowcount == 0:
                raise KeyError(f"User {user_id} not found")
        user = self.get_user(user_id)
        if user is None:  # pragma: no cover
            raise KeyError(f"User {user_id} not found after update")
        return user

    def leaderboard(self, limit: int = 20) -> List[UserRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM users ORDER BY total_points DESC, username ASC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_user(row) for row in rows]

    def _row_to_player(self, row: sqlite3.Row) -> PlayerRecord:
        return PlayerRecord(
            player_id=row["id"],
            name=row["name"],
            university=row["university"],
            category=row["category"],
            stats=PlayerStats.model_validate_json(row["stats_json"]),
        )

    def _row_to_user(self, row: sqlite3.Row) -> UserRecord:
        return UserRecord(
            user_id=row["id"],
            username=row["username"],
            budget=row["budget"],
            team=tuple(TeamMember.model_validate(item) for item in json.loads(row["team_json"])),
            total_points=row["total_points"],
            version=row["version"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )


__all__ = ["Spirit11Store"]
