"""Wallet repository Protocol: token balances per (holder, asset).

Stands in for the token transfer collaborator: stakes are debited here,
payouts and withdrawals are credited here.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class WalletRepositoryProtocol(Protocol):
    async def balance_of(self, db: AsyncSession, holder: str, asset: str) -> int: ...

    async def credit(self, db: AsyncSession, holder: str, asset: str, amount: int) -> int: ...

    async def debit(self, db: AsyncSession, holder: str, asset: str, amount: int) -> int: ...
