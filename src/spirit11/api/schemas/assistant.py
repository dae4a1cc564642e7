from __future__ import annotations

from pydantic import BaseModel


class ChatRequest(BaseModel):
    message: str = ""


class AssistantReply(BaseModel):
    reply: str
