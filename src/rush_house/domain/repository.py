"""House pool repository Protocol.

Every mutation runs inside the caller's transaction; get_for_update is the
row lock each state-changing operation takes first.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_house.domain.models import HousePool


class HousePoolRepositoryProtocol(Protocol):
    async def get(self, db: AsyncSession) -> HousePool: ...

    async def get_for_update(self, db: AsyncSession) -> HousePool: ...

    async def credit_stable(self, db: AsyncSession, amount: int) -> HousePool: ...

    async def debit_stable(self, db: AsyncSession, amount: int) -> HousePool: ...

    async def record_swap(
        self, db: AsyncSession, stable_in: int, payout_out: int
    ) -> HousePool: ...

    async def forward_payout(self, db: AsyncSession, amount: int) -> HousePool: ...
