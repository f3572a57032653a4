"""Price oracle capability Protocol.

Every call is a suspension point of the enclosing operation: it either returns
a value or raises an oracle AppError (5xxx) and the operation rolls back.
Prices applied during an operation are staged until the operation calls
commit_staged (after its DB commit) or discard_staged (on rollback).
"""

from collections.abc import Sequence
from typing import Protocol

from src.rush_oracle.domain.models import PriceSnapshot, PriceUpdate


class PriceOracleProtocol(Protocol):
    async def quote_update_fee(self, updates: Sequence[PriceUpdate]) -> int: ...

    async def apply_update(
        self, updates: Sequence[PriceUpdate], fee: int, now: int
    ) -> None: ...

    async def price_no_older_than(
        self, feed_id: str, max_age: int, now: int
    ) -> PriceSnapshot: ...

    async def price_in_window(
        self,
        feed_id: str,
        updates: Sequence[PriceUpdate],
        fee: int,
        min_publish_time: int,
        max_publish_time: int,
    ) -> PriceSnapshot: ...

    def commit_staged(self) -> None: ...

    def discard_staged(self) -> None: ...
