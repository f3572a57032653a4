"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.rush_common.database import engine
from src.rush_common.errors import AppError
from src.rush_common.redis_client import close_redis, get_redis
from src.rush_common.response import app_error_json
from src.rush_gateway.middleware.rate_limit import RateLimitMiddleware
from src.rush_gateway.middleware.request_log import RequestLogMiddleware
from src.rush_house.api.router import router as house_router
from src.rush_ledger.api.router import router as ledger_router
from src.rush_settlement.api.router import router as settlement_router
from src.rush_settlement.api.router import settlement_service
from src.rush_wallet.api.router import router as wallet_router

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Fail fast when PostgreSQL or Redis is down; release pools and Hermes on exit."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    redis = await get_redis()
    await redis.ping()
    logger.info(
        "%s started: bets %d..%d %s, payout x%d bps, resolve +%ds within %ds",
        settings.APP_NAME, settings.MIN_BET, settings.MAX_BET, settings.STABLE_ASSET,
        settings.PAYOUT_MULTIPLIER_BPS, settings.RESOLVE_DELAY_SECONDS,
        settings.RESOLVE_WINDOW_SECONDS,
    )
    try:
        yield
    finally:
        await settlement_service.close()
        await engine.dispose()
        await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# Added last = runs first: every request is logged, including rate-limited ones
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("AppError %d on %s: %s", exc.code, request.url.path, exc.message)
    return app_error_json(exc, request)


# /bets/{bet_id}/resolve and POST /bets come from settlement; reads from ledger
app.include_router(settlement_router, prefix="/api/v1")
app.include_router(ledger_router, prefix="/api/v1")
app.include_router(house_router, prefix="/api/v1")
app.include_router(wallet_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "app": settings.APP_NAME, "version": "0.1.0"}
