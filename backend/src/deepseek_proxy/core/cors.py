from __future__ import annotations

from typing import Dict, List, Sequence

WILDCARD = "*"

PREFLIGHT_MAX_AGE_S = 86400

# Attached to every REST response, whatever the allow-list says.
REST_CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def parse_allowed_origins(raw: str | None) -> List[str]:
    """Split a comma-separated ``ALLOWED_ORIGINS`` value.

    Unset or blank means allow everything.
    """
    if not raw or not raw.strip():
        return [WILDCARD]
    return [item.strip() for item in raw.split(",")]


def is_allowed(origin: str | None, allow_list: Sequence[str]) -> bool:
    if WILDCARD in allow_list:
        return True
    # No Origin header: same-origin page or non-browser client
    if not origin:
        return True
    return origin in allow_list


def preflight_headers(origin: str | None, allow_list: Sequence[str]) -> Dict[str, str]:
    """Headers for an ``OPTIONS`` preflight answer.

    The allow-origin header is only emitted for a wildcard list or a listed origin;
    it echoes the caller's origin, or ``*`` when none was sent.
    """
    headers = {
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
        "Access-Control-Max-Age": str(PREFLIGHT_MAX_AGE_S),
    }
    if WILDCARD in allow_list or (origin and origin in allow_list):
        headers["Access-Control-Allow-Origin"] = origin or WILDCARD
    return headers


def graphql_cors_headers(origin: str | None, allow_list: Sequence[str]) -> Dict[str, str]:
    headers = {
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With, Accept, Origin",
        "Vary": "Origin",
    }
    if origin and is_allowed(origin, allow_list):
        headers["Access-Control-Allow-Origin"] = origin
    return headers
