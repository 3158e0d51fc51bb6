from __future__ import annotations

import logging
from typing import Any, Dict

from ..core import errors
from ..core.config import Settings
from ..core.errors import UpstreamError
from ..integrations.deepseek_client import DeepSeekClient
from ..schemas.chat import ChatRequest, ChatResponse, TokenUsage, utc_timestamp
from ..utils.text import preview_text
from .normalizer import build_messages


log = logging.getLogger("proxy.services.chat")


DEFAULT_MODEL = "deepseek-chat"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048


def build_upstream_payload(req: ChatRequest) -> Dict[str, Any]:
    """Translate a canonical request into the DeepSeek wire format (never streaming)."""
    return {
        "model": req.model or DEFAULT_MODEL,
        "messages": build_messages(req),
        "temperature": DEFAULT_TEMPERATURE if req.temperature is None else req.temperature,
        "max_tokens": DEFAULT_MAX_TOKENS if req.max_tokens is None else req.max_tokens,
        "stream": False,
    }


def _to_chat_response(data: Any) -> ChatResponse:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        raise UpstreamError("No response from DeepSeek API", 500, errors.EMPTY_RESPONSE)
    reply = choices[0]["message"]["content"] or ""
    usage_raw = data.get("usage")
    return ChatResponse(
        reply=reply,
        status="success",
        timestamp=utc_timestamp(),
        usage=TokenUsage.model_validate(usage_raw) if usage_raw else None,
    )


async def complete(
    req: ChatRequest,
    settings: Settings,
    *,
    client: DeepSeekClient | None = None,
) -> ChatResponse:
    """Send ``req`` to DeepSeek and return the canonical response.

    Raises :class:`UpstreamError` for every failure. Anything that is not
    already typed (transport errors, unreadable bodies) becomes ``NETWORK_ERROR``.
    A client built here is closed before returning.
    """
    if not settings.deepseek_api_key:
        raise UpstreamError("DeepSeek API key not configured", 500, errors.MISSING_API_KEY)

    payload = build_upstream_payload(req)
    owned = client is None
    if client is None:
        client = DeepSeekClient(
            base_url=settings.deepseek_base_url,
            timeout_s=settings.deepseek_timeout_s,
        )
    try:
        data = await client.chat_completions(payload, api_key=settings.deepseek_api_key)
        response = _to_chat_response(data)
    except UpstreamError:
        raise
    except Exception as exc:
        log.error("DeepSeek call failed: %s", exc)
        raise UpstreamError(
            f"Failed to call DeepSeek API: {str(exc) or type(exc).__name__}",
            500,
            errors.NETWORK_ERROR,
        ) from exc
    finally:
        if owned:
            await client.aclose()

    log.info(
        "DeepSeek completion: model=%s session=%s reply_preview=\"%s\"",
        payload["model"],
        req.sessionId or "-",
        preview_text(response.reply),
    )
    return response
