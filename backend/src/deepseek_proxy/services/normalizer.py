"""Parsing and validation of incoming chat requests.

Both adapters go through :func:`validate_chat_request`; the REST adapter also
uses :func:`parse_chat_request` to turn a raw body into a :class:`ChatRequest`.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..core import errors
from ..core.errors import UpstreamError
from ..schemas.chat import ChatMessage, ChatRequest


log = logging.getLogger("proxy.services.normalizer")


MAX_MESSAGE_CHARS = 32000

SYSTEM_PREAMBLE = "你是一个有用的AI助手，请提供准确、有帮助的回答。"


def parse_chat_request(body: bytes | str) -> ChatRequest:
    """Decode a JSON body into a :class:`ChatRequest`.

    - invalid JSON raises ``INVALID_JSON``
    - a JSON value that is not an object is read as ``{}``
    - wrongly typed fields raise ``INVALID_REQUEST``
    """
    try:
        data: Any = json.loads(body)
    except (ValueError, TypeError) as exc:
        raise UpstreamError("Invalid JSON in request body", 400, errors.INVALID_JSON) from exc
    if not isinstance(data, dict):
        data = {}
    try:
        return ChatRequest.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        where = ".".join(str(part) for part in first.get("loc", ())) or "body"
        raise UpstreamError(
            f"Invalid request field '{where}': {first.get('msg', 'invalid value')}",
            400,
            errors.INVALID_REQUEST,
        ) from exc


def message_length(text: str) -> int:
    """Length in UTF-16 code units, so an emoji counts as two characters."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def validate_chat_request(req: ChatRequest) -> None:
    """Raise :class:`UpstreamError` on the first failing check.

    Checks only apply to ``message``; a request carrying only ``messages``
    is accepted whatever the array holds.
    """
    if req.message is None and req.messages is None:
        raise UpstreamError("Message or messages array is required", 400, errors.MISSING_MESSAGE)
    if req.message is None:
        return
    if not isinstance(req.message, str):
        raise UpstreamError("Message must be a string", 400, errors.INVALID_MESSAGE_TYPE)
    if not req.message.strip():
        raise UpstreamError("Message cannot be empty", 400, errors.EMPTY_MESSAGE)
    if message_length(req.message) > MAX_MESSAGE_CHARS:
        raise UpstreamError(
            f"Message too long (max {MAX_MESSAGE_CHARS} characters)",
            400,
            errors.MESSAGE_TOO_LONG,
        )


def build_messages(req: ChatRequest) -> List[Any]:
    """Return the message array sent upstream."""
    if req.messages is not None:
        return list(req.messages)
    turns: List[Dict[str, Any]] = [
        ChatMessage(role="system", content=SYSTEM_PREAMBLE).model_dump(),
        {"role": "user", "content": req.message},
    ]
    log.debug("Synthesized %d-turn conversation from single message", len(turns))
    return turns
