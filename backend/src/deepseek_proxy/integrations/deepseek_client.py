from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from ..core import errors
from ..core.errors import UpstreamError


log = logging.getLogger("proxy.integrations.deepseek")


INSUFFICIENT_BALANCE_MESSAGE = "账户余额不足，请前往 DeepSeek 平台充值后继续使用。"
INVALID_API_KEY_MESSAGE = "API密钥无效，请检查配置。"
RATE_LIMIT_MESSAGE = "请求频率过高，请稍后重试。"
ACCESS_DENIED_MESSAGE = "API访问被拒绝，请检查权限配置。"

DEFAULT_TIMEOUT_S = 90.0

_STATUS_ERRORS: Dict[int, Tuple[str, str]] = {
    401: (INVALID_API_KEY_MESSAGE, errors.INVALID_API_KEY),
    429: (RATE_LIMIT_MESSAGE, errors.RATE_LIMIT_EXCEEDED),
    403: (ACCESS_DENIED_MESSAGE, errors.ACCESS_DENIED),
}


def classify_error(status_code: int, body: Dict[str, Any]) -> UpstreamError:
    """Map a non-2xx DeepSeek answer to a typed error.

    Precedence: insufficient balance (402 or matching provider message), then
    401/429/403, then the provider's own message.
    """
    detail = body.get("error")
    provider_message = detail.get("message") if isinstance(detail, dict) else None
    message = provider_message or f"DeepSeek API error: {status_code}"
    error_type = errors.DEEPSEEK_API_ERROR

    if status_code == 402 or "insufficient balance" in str(message).lower():
        message, error_type = INSUFFICIENT_BALANCE_MESSAGE, errors.INSUFFICIENT_BALANCE
    elif status_code in _STATUS_ERRORS:
        message, error_type = _STATUS_ERRORS[status_code]

    return UpstreamError(str(message), status_code, error_type, original_error=body)


def _error_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class DeepSeekClient:
    """Async client for the DeepSeek chat completions endpoint.

    One POST per call, no retries. Non-2xx answers are raised as classified
    :class:`UpstreamError`; transport failures propagate as ``httpx`` errors.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        timeout_s: float | None = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        # timeout_s=None means no timeout at all, not httpx's 5s default
        client_kwargs: Dict[str, Any] = {"timeout": timeout_s}
        if transport is not None:
            client_kwargs["transport"] = transport
        self.client = httpx.AsyncClient(**client_kwargs)

    def _headers(self, api_key: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        key = api_key or self.api_key
        if key:
            headers["Authorization"] = f"Bearer {key}"
        return headers

    async def chat_completions(self, payload: Dict[str, Any], *, api_key: Optional[str] = None) -> Dict[str, Any]:
        url = f"{self.base_url}/chat/completions"
        log.debug("POST %s model=%s", url, payload.get("model"))
        response = await self.client.post(url, headers=self._headers(api_key), json=payload)
        if response.is_success:
            return response.json()
        error = classify_error(response.status_code, _error_body(response))
        log.error(
            "DeepSeek returned %s (%s): %s",
            response.status_code,
            error.error_type,
            response.text[:500],
        )
        raise error

    async def aclose(self) -> None:
        await self.client.aclose()
