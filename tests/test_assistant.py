import json

import pytest

from spirit11.assistant import (
    CHAT_FALLBACK,
    EMPTY_MESSAGE_REPLY,
    SUGGEST_FALLBACK,
    AssistantBridge,
    UnconfiguredGenerator,
    build_generator,
    redact_points,
    serialize_players,
)
from spirit11.models import PlayerRecord, RawStats
from spirit11.valuation import derive_stats


class FakeGenerator:
    def __init__(self, reply: str = "Pick the openers."):
        self.reply = reply
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class BrokenGenerator:
    async def generate(self, prompt: str) -> str:
        raise RuntimeError("quota exceeded")


def _players() -> list[PlayerRecord]:
    return [
        PlayerRecord(
            player_id="p1",
            name="Kasun Perera",
            university="University of Kelaniya",
            category="Batsman",
            stats=derive_stats(RawStats(total_runs=400, balls_faced=350, innings_played=8)),
        ),
        PlayerRecord(
            player_id="p2",
            name="Nuwan Silva",
            university="University of Jaffna",
            category="Bowler",
            stats=derive_stats(RawStats(wickets=14, overs_bowled=30, runs_conceded=190)),
        ),
    ]


def _contains_key(payload, key) -> bool:
    if isinstance(payload, dict):
        return key in payload or any(_contains_key(value, key) for value in payload.values())
    if isinstance(payload, list):
        return any(_contains_key(item, key) for item in payload)
    return False


def test_redact_points_at_any_depth():
    payload = {"points": 1, "stats": {"points": 2, "value": 3}, "history": [{"points": 4, "runs": 5}]}

    redacted = redact_points(payload)
    assert redacted == {"stats": {"value": 3}, "history": [{"runs": 5}]}
    # input untouched
    assert payload["stats"]["points"] == 2


def test_serialize_players_drops_points_keeps_value():
    data = json.loads(serialize_players(_players()))

    assert not _contains_key(data, "points")
    assert data[0]["stats"]["value"] > 0
    assert data[1]["name"] == "Nuwan Silva"


@pytest.mark.anyio
async def test_chat_sends_redacted_catalog():
    generator = FakeGenerator()
    bridge = AssistantBridge(generator)

    reply = await bridge.chat("Who should open?", _players())

    assert reply == "Pick the openers."
    (prompt,) = generator.prompts
    assert "Who should open?" in prompt
    assert "Kasun Perera" in prompt
    assert '"points"' not in prompt


@pytest.mark.anyio
async def test_suggest_team_sends_redacted_catalog():
    generator = FakeGenerator("Team: ...")
    bridge = AssistantBridge(generator, team_size=11)

    assert await bridge.suggest_team(_players()) == "Team: ..."
    (prompt,) = generator.prompts
    assert "best possible team of 11 players" in prompt
    assert '"points"' not in prompt


@pytest.mark.anyio
async def test_empty_message_skips_backend():
    generator = FakeGenerator()

    assert await AssistantBridge(generator).chat("   ", _players()) == EMPTY_MESSAGE_REPLY
    assert generator.prompts == []


@pytest.mark.anyio
async def test_backend_failure_returns_fallbacks(caplog):
    bridge = AssistantBridge(BrokenGenerator())

    with caplog.at_level("ERROR"):
        assert await bridge.chat("Who bowls best?", _players()) == CHAT_FALLBACK
        assert await bridge.suggest_team(_players()) == SUGGEST_FALLBACK
    assert "quota exceeded" in caplog.text


def test_build_generator_without_key():
    assert isinstance(build_generator(None, "gemini-pro"), UnconfiguredGenerator)
