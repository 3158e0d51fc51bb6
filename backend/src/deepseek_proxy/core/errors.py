from __future__ import annotations

from typing import Any

# Validation
INVALID_JSON = "INVALID_JSON"
INVALID_REQUEST = "INVALID_REQUEST"
MISSING_MESSAGE = "MISSING_MESSAGE"
INVALID_MESSAGE_TYPE = "INVALID_MESSAGE_TYPE"
EMPTY_MESSAGE = "EMPTY_MESSAGE"
MESSAGE_TOO_LONG = "MESSAGE_TOO_LONG"

# Upstream
MISSING_API_KEY = "MISSING_API_KEY"
INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
INVALID_API_KEY = "INVALID_API_KEY"
RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
ACCESS_DENIED = "ACCESS_DENIED"
DEEPSEEK_API_ERROR = "DEEPSEEK_API_ERROR"
EMPTY_RESPONSE = "EMPTY_RESPONSE"
NETWORK_ERROR = "NETWORK_ERROR"

# Adapters
INTERNAL_ERROR = "INTERNAL_ERROR"


class UpstreamError(RuntimeError):
    """Typed failure shared by the normalizer, the DeepSeek client and both adapters.

    ``status_code`` is the HTTP status the REST adapter answers with;
    ``original_error`` keeps the provider's raw error body for diagnostics.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str,
        original_error: Any | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.original_error = original_error

    def __repr__(self) -> str:
        return f"UpstreamError({self.error_type}, status={self.status_code}, message={self.message!r})"
