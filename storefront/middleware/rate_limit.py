"""Rate limiting middleware using slowapi"""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from storefront.core.config import settings


def get_rate_limit_key(request: Request) -> str:
    """Get rate limit key based on the bearer token or client IP"""
    authorization = request.headers.get("Authorization", "")
    if authorization.startswith("Bearer "):
        # Tokens are per user, so they bucket requests per caller
        return f"token:{authorization[7:][-32:]}"

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def custom_rate_limit_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """Render rate limit rejections in the response envelope"""
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "message": f"Too many requests. {exc.detail}",
            "code": "RATE_LIMIT_EXCEEDED",
        }
    )


def setup_rate_limiting(app: FastAPI) -> None:
    """Apply the default limits to every route"""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, custom_rate_limit_handler)
    app.add_middleware(SlowAPIMiddleware)
