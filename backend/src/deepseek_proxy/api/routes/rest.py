from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...core.cors import REST_CORS_HEADERS, is_allowed
from ...core.errors import UpstreamError
from ...schemas.chat import ChatResponse
from ...services.chat_service import complete
from ...services.normalizer import parse_chat_request, validate_chat_request


log = logging.getLogger("proxy.api.rest")


def _respond(body: ChatResponse, status_code: int) -> JSONResponse:
    return JSONResponse(
        body.model_dump(exclude_none=True),
        status_code=status_code,
        headers=dict(REST_CORS_HEADERS),
    )


def _error(message: str, status_code: int, error_type: str | None = None) -> JSONResponse:
    return _respond(ChatResponse.failure(message, error_type=error_type), status_code)


async def chat(request: Request) -> JSONResponse:
    """Legacy REST chat endpoint.

    Origin check, then body parsing, validation and the DeepSeek call. Typed
    failures keep their status code; anything else is a 500.
    """
    settings = request.app.state.settings
    try:
        origin = request.headers.get("origin")
        if not is_allowed(origin, settings.allowed_origins):
            log.warning("Rejected REST call from origin %s", origin)
            return _error("Origin not allowed", 403)

        payload = parse_chat_request(await request.body())
        validate_chat_request(payload)
        response = await complete(payload, settings, client=request.app.state.deepseek_client)
        return _respond(response, 200)
    except UpstreamError as exc:
        log.error(
            "REST API error: type=%s status=%s message=%s",
            exc.error_type,
            exc.status_code,
            exc.message,
        )
        return _error(exc.message, exc.status_code, exc.error_type)
    except Exception:
        log.exception("REST API error")
        return _error("Internal server error", 500)


def build_router(path: str) -> APIRouter:
    """REST chat mounted on the configurable ``path``."""
    router = APIRouter()
    router.add_api_route(path, chat, methods=["POST"], include_in_schema=False)
    return router
