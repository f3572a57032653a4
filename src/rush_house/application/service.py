"""HouseApplicationService: funding, operator withdrawal and balance reads.

fund/withdraw share the settlement engine's OperationGuard and lock the
house_pool row first, so they never interleave with placement or resolution.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.rush_common.datetime_utils import Clock, unix_now
from src.rush_common.errors import NotAuthorizedError
from src.rush_common.serial import OperationGuard, operation_guard
from src.rush_house.application.schemas import HouseBalanceResponse
from src.rush_house.domain.repository import HousePoolRepositoryProtocol
from src.rush_house.infrastructure.persistence import HousePoolRepository
from src.rush_ledger.domain.repository import BetRepositoryProtocol
from src.rush_ledger.infrastructure.persistence import BetRepository
from src.rush_settlement.domain.models import GameParams
from src.rush_settlement.rules.house_solvency import check_withdraw_reserve, open_liability
from src.rush_wallet.domain.repository import WalletRepositoryProtocol
from src.rush_wallet.infrastructure.persistence import WalletRepository

logger = logging.getLogger(__name__)


class HouseApplicationService:
    def __init__(
        self,
        house: HousePoolRepositoryProtocol | None = None,
        wallets: WalletRepositoryProtocol | None = None,
        bets: BetRepositoryProtocol | None = None,
        params: GameParams | None = None,
        operator_id: str | None = None,
        clock: Clock = unix_now,
        guard: OperationGuard = operation_guard,
    ) -> None:
        self._house: HousePoolRepositoryProtocol = house or HousePoolRepository()
        self._wallets: WalletRepositoryProtocol = wallets or WalletRepository()
        self._bets: BetRepositoryProtocol = bets or BetRepository()
        self._params = params or GameParams.from_settings()
        self._operator_id = operator_id or settings.OPERATOR_ID
        self._clock = clock
        self._guard = guard

    async def balance(self, db: AsyncSession) -> HouseBalanceResponse:
        return HouseBalanceResponse.from_pool(await self._house.get(db))

    async def fund(self, db: AsyncSession, caller: str, amount: int) -> HouseBalanceResponse:
        """Open to anyone: moves amount of USDC from the caller's wallet into the pool."""
        async with self._guard.run("fund"):
            try:
                await self._house.get_for_update(db)
                await self._wallets.debit(db, caller, self._params.stable_asset, amount)
                pool = await self._house.credit_stable(db, amount)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info(
            "House funded: caller=%s amount=%d balance=%d", caller, amount, pool.stable_balance
        )
        return HouseBalanceResponse.from_pool(pool)

    async def withdraw(self, db: AsyncSession, caller: str, amount: int) -> HouseBalanceResponse:
        """Operator only. Unchecked against open bets unless WITHDRAW_RESERVE_GUARD is on."""
        if caller != self._operator_id:
            raise NotAuthorizedError(caller)
        async with self._guard.run("withdraw"):
            try:
                current = await self._house.get_for_update(db)
                if self._params.withdraw_reserve_guard:
                    await self._check_reserve(db, current.stable_balance, amount)
                pool = await self._house.debit_stable(db, amount)
                await self._wallets.credit(db, caller, self._params.stable_asset, amount)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info("House withdrawal: amount=%d balance=%d", amount, pool.stable_balance)
        return HouseBalanceResponse.from_pool(pool)

    async def _check_reserve(self, db: AsyncSession, balance: int, amount: int) -> None:
        now = self._clock()
        stakes = await self._bets.open_stakes(db, now - self._params.resolve_window)
        liability = open_liability(stakes, self._params.payout_multiplier_bps)
        check_withdraw_reserve(balance, amount, liability)
