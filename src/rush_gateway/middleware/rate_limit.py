"""Fixed-window rate limiting for state-changing endpoints.

Only POST requests under /api/v1/bets, /api/v1/house and /api/v1/wallet are
counted; reads pass through untouched.

  key   = "ratelimit:{client_ip}:{minute_bucket}"
  count = INCR key  (EXPIRE 60 on first hit)
  count > RATE_LIMIT_PER_MINUTE  ->  429 RateLimitError + Retry-After
"""

import logging
import time
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from config.settings import settings
from src.rush_common.errors import RateLimitError
from src.rush_common.redis_client import get_redis
from src.rush_common.response import app_error_json

logger = logging.getLogger(__name__)

_LIMITED_PREFIXES = ("/api/v1/bets", "/api/v1/house", "/api/v1/wallet")
_WINDOW_SECONDS = 60


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
        limit: int | None = None,
    ) -> None:
        super().__init__(app)
        self._redis_factory = redis_factory
        self._limit = limit if limit is not None else settings.RATE_LIMIT_PER_MINUTE

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method != "POST" or not request.url.path.startswith(_LIMITED_PREFIXES):
            return await call_next(request)

        bucket = int(time.time()) // _WINDOW_SECONDS
        key = f"ratelimit:{_client_ip(request)}:{bucket}"
        redis = await self._redis_factory()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, _WINDOW_SECONDS)

        if count > self._limit:
            logger.warning("Rate limit hit: key=%s count=%d", key, count)
            return app_error_json(
                RateLimitError(), request, headers={"Retry-After": str(_WINDOW_SECONDS)}
            )
        return await call_next(request)
