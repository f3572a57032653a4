"""SettlementApplicationService: wires the engine to its collaborators.

Price updates always come from Hermes, never from the API caller:
  - placement:  the latest update for the bet's feed
  - resolution: the first update at or after the bet's resolve_at
fee_paid defaults to the oracle's quote for those updates.
"""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.datetime_utils import Clock, unix_now
from src.rush_common.errors import BetAlreadyResolvedError
from src.rush_house.infrastructure.persistence import HousePoolRepository
from src.rush_ledger.domain.repository import BetRepositoryProtocol
from src.rush_ledger.infrastructure.persistence import BetRepository
from src.rush_oracle.domain.models import PriceUpdate
from src.rush_oracle.domain.protocol import PriceOracleProtocol
from src.rush_oracle.feeds import feed_id_for
from src.rush_oracle.infrastructure.hermes_client import HermesClient
from src.rush_oracle.infrastructure.hermes_oracle import HermesPriceOracle
from src.rush_settlement.application.schemas import (
    PlaceBetRequest,
    PlaceBetResponse,
    ResolveBetRequest,
    ResolveBetResponse,
)
from src.rush_settlement.engine.engine import SettlementEngine
from src.rush_settlement.rules.timing import check_resolve_window
from src.rush_swap.infrastructure.fixed_rate_venue import FixedRateSwapVenue
from src.rush_wallet.infrastructure.persistence import WalletRepository


class SettlementApplicationService:
    def __init__(
        self,
        engine: SettlementEngine | None = None,
        oracle: PriceOracleProtocol | None = None,
        bets: BetRepositoryProtocol | None = None,
        hermes: HermesClient | None = None,
        clock: Clock = unix_now,
    ) -> None:
        self._bets: BetRepositoryProtocol = bets or BetRepository()
        self._oracle: PriceOracleProtocol = oracle or HermesPriceOracle()
        self._engine = engine or SettlementEngine(
            bets=self._bets,
            house=HousePoolRepository(),
            wallets=WalletRepository(),
            oracle=self._oracle,
            swap=FixedRateSwapVenue(),
            clock=clock,
        )
        self._hermes = hermes
        self._clock = clock

    def _hermes_client(self) -> HermesClient:
        if self._hermes is None:
            self._hermes = HermesClient()
        return self._hermes

    async def close(self) -> None:
        if self._hermes is not None:
            await self._hermes.close()

    async def place_bet(
        self, db: AsyncSession, owner: str, body: PlaceBetRequest
    ) -> PlaceBetResponse:
        updates = await self._hermes_client().latest_updates(feed_id_for(body.asset.value))
        fee_paid = await self._fee_or_quote(body.fee_paid, updates)
        result = await self._engine.place(
            db,
            owner=owner,
            asset=body.asset.value,
            direction=body.direction.value,
            stake=body.stake,
            updates=updates,
            fee_paid=fee_paid,
        )
        return PlaceBetResponse.from_result(result)

    async def resolve_bet(
        self, db: AsyncSession, caller: str, bet_id: int, body: ResolveBetRequest
    ) -> ResolveBetResponse:
        bet = await self._bets.get(db, bet_id)
        # Release the read transaction; the engine opens its own locking one
        await db.rollback()
        # Hermes has nothing to serve before resolve_at; fail on state and timing first
        if bet.resolved:
            raise BetAlreadyResolvedError(bet_id)
        check_resolve_window(
            bet.id, bet.resolve_at, self._engine.params.resolve_window, self._clock()
        )
        updates = await self._hermes_client().updates_at(feed_id_for(bet.asset), bet.resolve_at)
        fee_paid = await self._fee_or_quote(body.fee_paid, updates)
        result = await self._engine.resolve(db, bet_id, updates, fee_paid, payer=caller)
        return ResolveBetResponse.from_result(result)

    async def _fee_or_quote(self, fee_paid: int | None, updates: Sequence[PriceUpdate]) -> int:
        if fee_paid is not None:
            return fee_paid
        return await self._oracle.quote_update_fee(updates)
