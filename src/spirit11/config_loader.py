"""Persist and load CSV column mapping profiles for player imports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict


@dataclass
class ImportProfile:
    players_mapping: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "ImportProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(players_mapping=data.get("players_mapping", {}))

    def save(self, path: Path) -> None:
        payload = {"players_mapping": self.players_mapping}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
