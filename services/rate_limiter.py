"""
Per-IP rate limiting for the generate endpoint.

Uses `slowapi` (which wraps `limits`) with two fixed-window counters: a short
window against bursts and a long window against cost.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from config import Settings
from services.request_logger import client_ip

SHORT_LIMIT_MESSAGE = (
    "短時間に多くのリクエストが送信されました。少し時間をおいてから再度お試しください。"
)
LONG_LIMIT_MESSAGE = (
    "1時間あたりの利用上限に達しました。しばらく時間をおいてから再度お試しください。"
)


def short_limit(settings: Settings) -> str:
    return f"{settings.rate_limit_short_max}/minute"


def long_limit(settings: Settings) -> str:
    return f"{settings.rate_limit_long_max}/hour"


def create_limiter() -> Limiter:
    """Create a limiter keyed by the (X-Forwarded-For aware) client address."""
    return Limiter(
        key_func=client_ip,
        strategy="fixed-window",
        storage_uri="memory://",
        headers_enabled=True,
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer with 429 and the message of the limit that was hit."""
    response = JSONResponse({"error": exc.detail}, status_code=429)
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response
