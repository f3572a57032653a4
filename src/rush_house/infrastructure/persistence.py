"""HousePoolRepository: single-row house_pool table.

The row (id = 1) is created at zero by migration and never deleted.
Debits are conditional UPDATEs; 0 rows returned means the pool cannot cover it.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.errors import InsufficientHouseFundsError, InternalError
from src.rush_house.domain.models import HousePool

_COLUMNS = "stable_balance, payout_balance, version, updated_at"

_GET_SQL = text(f"SELECT {_COLUMNS} FROM house_pool WHERE id = 1")

_GET_FOR_UPDATE_SQL = text(f"SELECT {_COLUMNS} FROM house_pool WHERE id = 1 FOR UPDATE")

_CREDIT_STABLE_SQL = text(f"""
    UPDATE house_pool
    SET stable_balance = stable_balance + :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = 1
    RETURNING {_COLUMNS}
""")

_DEBIT_STABLE_SQL = text(f"""
    UPDATE house_pool
    SET stable_balance = stable_balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = 1 AND stable_balance >= :amount
    RETURNING {_COLUMNS}
""")

_RECORD_SWAP_SQL = text(f"""
    UPDATE house_pool
    SET stable_balance = stable_balance - :stable_in,
        payout_balance = payout_balance + :payout_out,
        version = version + 1,
        updated_at = NOW()
    WHERE id = 1 AND stable_balance >= :stable_in
    RETURNING {_COLUMNS}
""")

_FORWARD_PAYOUT_SQL = text(f"""
    UPDATE house_pool
    SET payout_balance = payout_balance - :amount,
        version = version + 1,
        updated_at = NOW()
    WHERE id = 1 AND payout_balance >= :amount
    RETURNING {_COLUMNS}
""")


def _row_to_pool(row: object) -> HousePool:
    return HousePool(
        stable_balance=row.stable_balance,  # type: ignore[attr-defined]
        payout_balance=int(row.payout_balance),  # type: ignore[attr-defined]
        version=row.version,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class HousePoolRepository:
    async def get(self, db: AsyncSession) -> HousePool:
        return await self._fetch(db, _GET_SQL, {})

    async def get_for_update(self, db: AsyncSession) -> HousePool:
        return await self._fetch(db, _GET_FOR_UPDATE_SQL, {})

    async def credit_stable(self, db: AsyncSession, amount: int) -> HousePool:
        return await self._fetch(db, _CREDIT_STABLE_SQL, {"amount": amount})

    async def debit_stable(self, db: AsyncSession, amount: int) -> HousePool:
        row = (await db.execute(_DEBIT_STABLE_SQL, {"amount": amount})).fetchone()
        if row is None:
            pool = await self.get(db)
            raise InsufficientHouseFundsError(amount, pool.stable_balance)
        return _row_to_pool(row)

    async def record_swap(
        self, db: AsyncSession, stable_in: int, payout_out: int
    ) -> HousePool:
        row = (
            await db.execute(
                _RECORD_SWAP_SQL, {"stable_in": stable_in, "payout_out": payout_out}
            )
        ).fetchone()
        if row is None:
            pool = await self.get(db)
            raise InsufficientHouseFundsError(stable_in, pool.stable_balance)
        return _row_to_pool(row)

    async def forward_payout(self, db: AsyncSession, amount: int) -> HousePool:
        row = (await db.execute(_FORWARD_PAYOUT_SQL, {"amount": amount})).fetchone()
        if row is None:
            raise InternalError(f"House payout balance cannot forward {amount}")
        return _row_to_pool(row)

    async def _fetch(self, db: AsyncSession, sql: object, params: dict[str, int]) -> HousePool:
        row = (await db.execute(sql, params)).fetchone()  # type: ignore[arg-type]
        if row is None:
            raise InternalError("house_pool row missing, run migrations")
        return _row_to_pool(row)
