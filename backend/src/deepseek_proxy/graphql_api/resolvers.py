"""Resolvers for the GraphQL front end.

``sendMessage`` shares the normalizer and the DeepSeek call with the REST
adapter but never raises into the GraphQL engine: every failure is returned
as a regular ``ChatResponse`` with ``status: ERROR``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from ariadne import MutationType, QueryType
from graphql import GraphQLResolveInfo

from ..core import errors
from ..core.errors import UpstreamError
from ..schemas.chat import ChatRequest, ChatResponse, utc_timestamp
from ..services.chat_service import complete
from ..services.normalizer import MAX_MESSAGE_CHARS, validate_chat_request


log = logging.getLogger("proxy.graphql")


API_VERSION = "2.0.0-graphql"
SUPPORTED_MODELS = ["deepseek-chat", "deepseek-coder"]

query = QueryType()
mutation = MutationType()


@query.field("health")
def resolve_health(*_: Any) -> Dict[str, Any]:
    return {"status": "OK", "timestamp": utc_timestamp(), "version": API_VERSION}


@query.field("apiConfig")
def resolve_api_config(*_: Any) -> Dict[str, Any]:
    return {
        "version": API_VERSION,
        "supportedModels": list(SUPPORTED_MODELS),
        "maxTokens": MAX_MESSAGE_CHARS,
        "timestamp": utc_timestamp(),
    }


def _to_chat_request(data: Dict[str, Any]) -> ChatRequest:
    # Roles arrive already lower-cased through the ChatRole enum binding.
    history = data.get("messages")
    return ChatRequest(
        message=data.get("message"),
        messages=(
            [{"role": m["role"], "content": m["content"]} for m in history]
            if history is not None
            else None
        ),
        userId=data.get("userId"),
        sessionId=data.get("sessionId"),
        model=data.get("model"),
        temperature=data.get("temperature"),
        max_tokens=data.get("maxTokens"),
    )


def _render(response: ChatResponse) -> Dict[str, Any]:
    usage = None
    if response.usage is not None:
        usage = {
            "promptTokens": response.usage.prompt_tokens,
            "completionTokens": response.usage.completion_tokens,
            "totalTokens": response.usage.total_tokens,
        }
    return {
        "reply": response.reply,
        "status": response.status,
        "timestamp": response.timestamp,
        "usage": usage,
        "error": response.error,
        "errorType": response.errorType,
    }


@mutation.field("sendMessage")
async def resolve_send_message(_: Any, info: GraphQLResolveInfo, input: Dict[str, Any]) -> Dict[str, Any]:
    context = info.context
    try:
        chat_request = _to_chat_request(input)
        validate_chat_request(chat_request)
        response = await complete(chat_request, context["settings"], client=context.get("client"))
    except UpstreamError as exc:
        log.warning(
            "GraphQL sendMessage failed: type=%s status=%s message=%s",
            exc.error_type,
            exc.status_code,
            exc.message,
        )
        response = ChatResponse.failure(exc.message, error_type=exc.error_type)
    except Exception:
        log.exception("GraphQL sendMessage error")
        response = ChatResponse.failure("Internal server error", error_type=errors.INTERNAL_ERROR)
    return _render(response)
