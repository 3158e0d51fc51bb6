from __future__ import annotations

from fastapi import APIRouter, Request, Response

from ...core.cors import preflight_headers


router = APIRouter()


@router.options("/{full_path:path}", include_in_schema=False)
async def preflight(request: Request, full_path: str = "") -> Response:
    """Answer a CORS preflight on any path."""
    settings = request.app.state.settings
    headers = preflight_headers(request.headers.get("origin"), settings.allowed_origins)
    return Response(status_code=204, headers=headers)
