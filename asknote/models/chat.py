"""Chat history for the current session."""
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ChatMessage(BaseModel):
    """Single message exchanged in the chat."""
    sender: Literal["user", "bot"]
    text: str
    created_at: str = Field(default_factory=_now_iso)  # ISO timestamp
