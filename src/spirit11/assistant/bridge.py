"""Relay catalog questions to a text-generation backend without leaking points."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Protocol

from spirit11.config import MAX_TEAM_SIZE
from spirit11.models import PlayerRecord

from .prompts import chat_prompt, suggest_team_prompt

logger = logging.getLogger(__name__)

REDACTED_KEYS = frozenset({"points"})

CHAT_FALLBACK = "I'm having trouble processing your request right now. Please try again later."
SUGGEST_FALLBACK = "I'm having trouble analyzing the team data right now. Please try again later."
EMPTY_MESSAGE_REPLY = "Ask me anything about the players or your team strategy."


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


def redact_points(payload: Any) -> Any:
    """Return a copy of ``payload`` with every ``points`` key removed, at any depth."""

    if isinstance(payload, dict):
        return {key: redact_points(value) for key, value in payload.items() if key not in REDACTED_KEYS}
    if isinstance(payload, (list, tuple)):
        return [redact_points(item) for item in payload]
    return payload


def serialize_players(players: Iterable[PlayerRecord | dict]) -> str:
    data = [player.model_dump() if isinstance(player, PlayerRecord) else player for player in players]
    return json.dumps(redact_points(data), ensure_ascii=False)


class AssistantBridge:
    """Stateless per call: every request re-sends the catalog it needs."""

    def __init__(self, generator: TextGenerator, *, team_size: int = MAX_TEAM_SIZE):
        self.generator = generator
        self.team_size = team_size

    async def chat(self, message: str, players: Iterable[PlayerRecord | dict]) -> str:
        question = (message or "").strip()
        if not question:
            return EMPTY_MESSAGE_REPLY
        prompt = chat_prompt(serialize_players(players), question)
        try:
            return await self.generator.generate(prompt)
        except Exception:
            logger.exception("Error getting chat response")
            return CHAT_FALLBACK

    async def suggest_team(self, players: Iterable[PlayerRecord | dict]) -> str:
        prompt = suggest_team_prompt(serialize_players(players), self.team_size)
        try:
            return await self.generator.generate(prompt)
        except Exception:
            logger.exception("Error suggesting team")
            return SUGGEST_FALLBACK
