"""WalletApplicationService: balance reads and the simulated deposit."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.rush_wallet.application.schemas import WalletBalanceResponse
from src.rush_wallet.domain.repository import WalletRepositoryProtocol
from src.rush_wallet.infrastructure.persistence import WalletRepository

logger = logging.getLogger(__name__)


class WalletApplicationService:
    def __init__(self, repo: WalletRepositoryProtocol | None = None) -> None:
        self._repo: WalletRepositoryProtocol = repo or WalletRepository()

    async def get_balance(self, db: AsyncSession, holder: str) -> WalletBalanceResponse:
        stable = await self._repo.balance_of(db, holder, settings.STABLE_ASSET)
        payout = await self._repo.balance_of(db, holder, settings.PAYOUT_ASSET)
        native = await self._repo.balance_of(db, holder, settings.ORACLE_FEE_ASSET)
        return WalletBalanceResponse.from_units(holder, stable, payout, native)

    async def deposit(
        self, db: AsyncSession, holder: str, amount: int, asset: str = settings.STABLE_ASSET
    ) -> WalletBalanceResponse:
        """Simulated deposit: mints amount of asset (stable or native) into the wallet."""
        try:
            await self._repo.credit(db, holder, asset, amount)
            result = await self.get_balance(db, holder)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Simulated deposit: holder=%s asset=%s amount=%d", holder, asset, amount)
        return result
