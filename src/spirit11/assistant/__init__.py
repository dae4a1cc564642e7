"""Spiriter assistant bridge."""

from .bridge import (
    CHAT_FALLBACK,
    EMPTY_MESSAGE_REPLY,
    SUGGEST_FALLBACK,
    AssistantBridge,
    TextGenerator,
    redact_points,
    serialize_players,
)
from .gemini import GeminiTextGenerator, UnconfiguredGenerator, build_generator

__all__ = [
    "CHAT_FALLBACK",
    "EMPTY_MESSAGE_REPLY",
    "SUGGEST_FALLBACK",
    "AssistantBridge",
    "GeminiTextGenerator",
    "TextGenerator",
    "UnconfiguredGenerator",
    "build_generator",
    "redact_points",
    "serialize_players",
]
