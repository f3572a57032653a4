"""WalletRepository: concrete implementation of WalletRepositoryProtocol.

Balance mutations are single atomic UPDATE/UPSERT ... RETURNING statements.
A debit that returns 0 rows means the holder cannot cover the amount.

Transaction ownership: the CALLER commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.errors import InsufficientWalletBalanceError, InternalError

_GET_BALANCE_SQL = text("""
    SELECT amount FROM wallet_balances
    WHERE holder = :holder AND asset = :asset
""")

_CREDIT_SQL = text("""
    INSERT INTO wallet_balances (holder, asset, amount)
    VALUES (:holder, :asset, :amount)
    ON CONFLICT (holder, asset) DO UPDATE
        SET amount = wallet_balances.amount + EXCLUDED.amount,
            updated_at = NOW()
    RETURNING amount
""")

_DEBIT_SQL = text("""
    UPDATE wallet_balances
    SET amount = amount - :amount,
        updated_at = NOW()
    WHERE holder = :holder AND asset = :asset AND amount >= :amount
    RETURNING amount
""")


class WalletRepository:
    async def balance_of(self, db: AsyncSession, holder: str, asset: str) -> int:
        result = await db.execute(_GET_BALANCE_SQL, {"holder": holder, "asset": asset})
        amount = result.scalar_one_or_none()
        return int(amount) if amount is not None else 0

    async def credit(self, db: AsyncSession, holder: str, asset: str, amount: int) -> int:
        result = await db.execute(
            _CREDIT_SQL, {"holder": holder, "asset": asset, "amount": amount}
        )
        balance = result.scalar_one_or_none()
        if balance is None:
            raise InternalError("Wallet upsert returned no rows")
        return int(balance)

    async def debit(self, db: AsyncSession, holder: str, asset: str, amount: int) -> int:
        result = await db.execute(
            _DEBIT_SQL, {"holder": holder, "asset": asset, "amount": amount}
        )
        balance = result.scalar_one_or_none()
        if balance is None:
            available = await self.balance_of(db, holder, asset)
            raise InsufficientWalletBalanceError(holder, asset, amount, available)
        return int(balance)
