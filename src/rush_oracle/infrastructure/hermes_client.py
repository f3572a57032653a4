"""Pyth Hermes HTTP client: fetches price update payloads for a feed.

The only source of price updates; API callers never supply them:
  - placement:  latest update       GET /v2/updates/price/latest
  - resolution: update at resolve_at GET /v2/updates/price/{timestamp}
"""

import logging
from typing import Any

import httpx

from config.settings import settings
from src.rush_common.errors import OracleUpdateFailedError
from src.rush_oracle.domain.models import PriceUpdate

logger = logging.getLogger(__name__)


class HermesClient:
    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=settings.PYTH_HERMES_URL,
            timeout=settings.PYTH_TIMEOUT_SECONDS,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def latest_updates(self, feed_id: str) -> list[PriceUpdate]:
        return await self._fetch("/v2/updates/price/latest", feed_id)

    async def updates_at(self, feed_id: str, timestamp: int) -> list[PriceUpdate]:
        """Updates for the first publish at or after timestamp."""
        return await self._fetch(f"/v2/updates/price/{timestamp}", feed_id)

    async def _fetch(self, path: str, feed_id: str) -> list[PriceUpdate]:
        try:
            response = await self._client.get(
                path, params={"ids[]": [f"0x{feed_id}"], "parsed": "true"}
            )
            response.raise_for_status()
            data: dict[str, Any] = response.json()
        except httpx.HTTPError as e:
            logger.error("Hermes request %s failed: %s", path, e)
            raise OracleUpdateFailedError(f"price service unavailable ({e})") from e

        try:
            updates = [PriceUpdate.from_hermes(entry) for entry in data.get("parsed") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise OracleUpdateFailedError(f"malformed price payload ({e})") from e
        if not updates:
            raise OracleUpdateFailedError(f"no price published for {feed_id}")
        logger.debug("Hermes %s returned %d update(s) for %s", path, len(updates), feed_id)
        return updates
