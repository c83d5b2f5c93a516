"""Security middleware and rate limiting."""

from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import Response
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from lingopal.config.settings import get_settings


limiter = Limiter(key_func=get_remote_address, enabled=get_settings().RATE_LIMIT_ENABLED)


class SimpleSecurityMiddleware(BaseHTTPMiddleware):
    """Adds essential security headers to every response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle request with security headers."""
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response


# Rate limiting decorators
auth_rate_limit = limiter.limit("5/minute")  # Sign-in / sign-up attempts
ai_rate_limit = limiter.limit("30/minute")  # Speech and chat vendor calls
mail_rate_limit = limiter.limit("10/minute")
api_rate_limit = limiter.limit("100/minute")  # General API calls


def create_rate_limit_dependency(
    name: str,
    limit_decorator: Callable[[Callable], Callable],
) -> Callable[[Request], Awaitable[None]]:
    """Create a rate limit dependency from a decorator.

    This allows applying rate limits at router or route level without
    touching endpoint signatures. slowapi keys limits by function name, so
    every dependency gets its own.
    """

    async def rate_limited_dependency(request: Request) -> None:
        """Apply rate limiting to the protected endpoints."""

    rate_limited_dependency.__name__ = f"{name}_rate_limit"
    rate_limited_dependency.__qualname__ = rate_limited_dependency.__name__
    return limit_decorator(rate_limited_dependency)


api_route_limit = create_rate_limit_dependency("api", api_rate_limit)
auth_route_limit = create_rate_limit_dependency("auth", auth_rate_limit)
ai_route_limit = create_rate_limit_dependency("ai", ai_rate_limit)
mail_route_limit = create_rate_limit_dependency("mail", mail_rate_limit)
