from datetime import datetime, timezone
from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["user", "assistant", "system"]
ResponseStatus = Literal["success", "error"]


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Canonical chat request shared by the REST and GraphQL adapters.

    ``message`` stays untyped so a non-text value reaches the normalizer
    (``INVALID_MESSAGE_TYPE``); ``messages`` is forwarded upstream as-is.
    """

    model_config = ConfigDict(extra="ignore")

    message: Any = None
    messages: List[Any] | None = None
    userId: str | None = None
    sessionId: str | None = None
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


class TokenUsage(BaseModel):
    # DeepSeek adds cache counters; they are passed through untouched
    model_config = ConfigDict(extra="allow")

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    reply: str
    status: ResponseStatus
    timestamp: str
    error: str | None = None
    errorType: str | None = None
    usage: TokenUsage | None = None

    @classmethod
    def failure(cls, message: str, *, error_type: str | None = None, timestamp: str | None = None) -> "ChatResponse":
        return cls(
            reply="",
            status="error",
            timestamp=timestamp or utc_timestamp(),
            error=message,
            errorType=error_type,
        )


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2025-01-01T12:00:00.000Z``."""
    now = datetime.now(tz=timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "TokenUsage",
    "Role",
    "ResponseStatus",
    "utc_timestamp",
]
