"""Bet ledger repository Protocol: dependency inversion for testability.

The ledger exclusively owns Bet rows and the per-owner index. Callers
validate inputs before create(); mark_resolved() is the only mutation after it.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_ledger.domain.models import Bet


class BetRepositoryProtocol(Protocol):
    async def create(
        self,
        db: AsyncSession,
        owner: str,
        asset: str,
        direction: str,
        stake_amount: int,
        strike_price: int,
        strike_expo: int,
        placed_at: int,
        resolve_at: int,
    ) -> Bet: ...

    async def get(self, db: AsyncSession, bet_id: int) -> Bet: ...

    async def get_for_update(self, db: AsyncSession, bet_id: int) -> Bet: ...

    async def mark_resolved(
        self, db: AsyncSession, bet_id: int, won: bool, payout_amount: int
    ) -> Bet: ...

    async def bets_of(self, db: AsyncSession, owner: str) -> list[int]: ...

    async def get_many(self, db: AsyncSession, bet_ids: list[int]) -> list[Bet]: ...

    async def open_stakes(self, db: AsyncSession, earliest_resolve_at: int) -> list[int]: ...
