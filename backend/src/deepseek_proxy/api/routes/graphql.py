from __future__ import annotations

import logging
from typing import Any, Dict

from ariadne.asgi import GraphQL
from ariadne.explorer import ExplorerHttp405
from fastapi import APIRouter, Request, Response

from ...core.config import Settings
from ...core.cors import graphql_cors_headers
from ...graphql_api.schema import schema


log = logging.getLogger("proxy.api.graphql")


def _context(request: Request, data: Any = None) -> Dict[str, Any]:
    return {
        "request": request,
        "settings": request.app.state.settings,
        "client": request.app.state.deepseek_client,
    }


def build_router(settings: Settings) -> APIRouter:
    """GraphQL over GET (queries only) and POST on ``settings.graphql_path``.

    Domain failures live inside the ``sendMessage`` result, so a successful
    execution is always a 200; malformed operations get a 400 from ariadne.
    A GET without ``query`` is an empty 404; no explorer page is served.
    """
    graphql_app = GraphQL(
        schema,
        context_value=_context,
        execute_get_queries=True,
        explorer=ExplorerHttp405(),
        debug=settings.env == "development",
    )
    router = APIRouter()

    async def graphql_endpoint(request: Request) -> Response:
        if request.method == "GET" and not request.query_params.get("query"):
            return Response(status_code=404)
        response = await graphql_app.handle_request(request)
        if response.status_code >= 400:
            log.warning("GraphQL %s request rejected with %s", request.method, response.status_code)
        response.headers.update(
            graphql_cors_headers(request.headers.get("origin"), request.app.state.settings.allowed_origins)
        )
        return response

    router.add_api_route(
        settings.graphql_path,
        graphql_endpoint,
        methods=["GET", "POST"],
        include_in_schema=False,
    )
    return router
