"""HermesPriceOracle: in-process price store fed by Hermes update payloads.

Mirrors the on-chain Pyth contract surface the settlement engine relies on:
a per-update fee, a persistent "latest price" per feed (only ever moves
forward in publish time), and a one-shot parse of a payload constrained to a
publish-time window that does not touch the store.

Updates applied during an operation are staged. They become the stored latest
price only when the operation commits (commit_staged) and are dropped when it
rolls back (discard_staged). Reads inside the operation see staged prices.
"""

import logging
from collections.abc import Sequence

from config.settings import settings
from src.rush_common.errors import (
    OracleUpdateFailedError,
    PriceOutOfWindowError,
    StalePriceError,
)
from src.rush_oracle.domain.models import PriceSnapshot, PriceUpdate, normalize_feed_id

logger = logging.getLogger(__name__)


def _snapshot(update: PriceUpdate) -> PriceSnapshot:
    return PriceSnapshot(
        feed_id=update.feed_id,
        price=update.price,
        expo=update.expo,
        publish_time=update.publish_time,
    )


class HermesPriceOracle:
    def __init__(
        self, fee_per_update: int | None = None, max_future_skew: int | None = None
    ) -> None:
        self._fee_per_update = (
            fee_per_update if fee_per_update is not None else settings.ORACLE_UPDATE_FEE
        )
        self._max_future_skew = (
            max_future_skew
            if max_future_skew is not None
            else settings.ORACLE_MAX_FUTURE_SKEW_SECONDS
        )
        self._latest: dict[str, PriceSnapshot] = {}
        self._staged: dict[str, PriceSnapshot] = {}

    async def quote_update_fee(self, updates: Sequence[PriceUpdate]) -> int:
        return self._fee_per_update * len(updates)

    async def apply_update(self, updates: Sequence[PriceUpdate], fee: int, now: int) -> None:
        self._check_payment(updates, fee)
        for update in updates:
            if update.price <= 0:
                raise OracleUpdateFailedError(f"non-positive price for {update.feed_id}")
            self._check_not_future(update.feed_id, update.publish_time, now)
        for update in updates:
            current = self._current(update.feed_id)
            if current is None or update.publish_time > current.publish_time:
                self._staged[update.feed_id] = _snapshot(update)

    async def price_no_older_than(self, feed_id: str, max_age: int, now: int) -> PriceSnapshot:
        snapshot = self._current(normalize_feed_id(feed_id))
        if snapshot is None:
            raise OracleUpdateFailedError(f"no price available for {feed_id}")
        self._check_not_future(feed_id, snapshot.publish_time, now)
        if now - snapshot.publish_time > max_age:
            raise StalePriceError(feed_id, snapshot.publish_time, max_age)
        return snapshot

    async def price_in_window(
        self,
        feed_id: str,
        updates: Sequence[PriceUpdate],
        fee: int,
        min_publish_time: int,
        max_publish_time: int,
    ) -> PriceSnapshot:
        self._check_payment(updates, fee)
        wanted = normalize_feed_id(feed_id)
        for update in updates:
            if update.feed_id != wanted:
                continue
            if min_publish_time <= update.publish_time <= max_publish_time and update.price > 0:
                return _snapshot(update)
        logger.info(
            "No %s update in [%d, %d] among %d payload entries",
            feed_id, min_publish_time, max_publish_time, len(updates),
        )
        raise PriceOutOfWindowError(feed_id, min_publish_time, max_publish_time)

    def commit_staged(self) -> None:
        self._latest.update(self._staged)
        self._staged.clear()

    def discard_staged(self) -> None:
        if self._staged:
            logger.debug("Discarding %d staged price(s)", len(self._staged))
        self._staged.clear()

    def _current(self, feed_id: str) -> PriceSnapshot | None:
        return self._staged.get(feed_id) or self._latest.get(feed_id)

    def _check_not_future(self, feed_id: str, publish_time: int, now: int) -> None:
        if publish_time > now + self._max_future_skew:
            raise OracleUpdateFailedError(
                f"{feed_id} published at {publish_time}, after now {now}"
            )

    def _check_payment(self, updates: Sequence[PriceUpdate], fee: int) -> None:
        if not updates:
            raise OracleUpdateFailedError("empty update payload")
        required = self._fee_per_update * len(updates)
        if fee < required:
            raise OracleUpdateFailedError(f"fee {fee} below required {required}")
