"""Google Gemini backend for the assistant bridge."""

from __future__ import annotations

import logging
from typing import Any

import google.generativeai as genai

logger = logging.getLogger(__name__)


def _extract_text(resp: Any) -> str:
    text = getattr(resp, "text", None)
    if isinstance(text, str) and text.strip():
        return text
    parts = resp.candidates[0].content.parts
    out = [p.text for p in parts if isinstance(getattr(p, "text", None), str) and p.text]
    if not out:
        raise ValueError("Gemini returned an empty response")
    return "\n".join(out)


class GeminiTextGenerator:
    def __init__(self, api_key: str, *, model_name: str = "gemini-pro"):
        if not api_key:
            raise ValueError("Missing Gemini API key")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(model_name)

    async def generate(self, prompt: str) -> str:
        resp = await self._model.generate_content_async(prompt)
        return _extract_text(resp)


class UnconfiguredGenerator:
    """Stand-in when no API key is set; every call fails so callers fall back."""

    async def generate(self, prompt: str) -> str:
        raise RuntimeError("Gemini API key is not configured")


def build_generator(api_key: str | None, model_name: str) -> GeminiTextGenerator | UnconfiguredGenerator:
    if not api_key:
        logger.warning("No Gemini API key configured; assistant replies will use the fallback text")
        return UnconfiguredGenerator()
    return GeminiTextGenerator(api_key, model_name=model_name)
