"""SettlementEngine: bet placement and resolution against the shared house pool.

Both paths follow the same shape:
  1. enter the process-wide OperationGuard (no interleaving, no re-entry)
  2. read the clock once
  3. lock the house_pool row (cross-process serialization point)
  4. run every check and external call (oracle, swap) before any write
  5. apply all balance / ledger writes (oracle fee included), then commit
  6. publish the prices the oracle staged during the operation

Any exception rolls back the session and discards the staged prices, so a
failed placement never keeps the stake or moves the stored latest price, and a
failed resolution never records a partial payout.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from src.rush_common.datetime_utils import Clock, unix_now
from src.rush_common.errors import (
    BetAlreadyResolvedError,
    OracleUpdateFailedError,
    SwapFailedError,
)
from src.rush_common.serial import OperationGuard, operation_guard
from src.rush_common.units import payout_swap_amount
from src.rush_house.domain.models import HOUSE_ACCOUNT_ID
from src.rush_house.domain.repository import HousePoolRepositoryProtocol
from src.rush_ledger.domain.models import Bet
from src.rush_ledger.domain.repository import BetRepositoryProtocol
from src.rush_oracle.domain.models import PriceSnapshot, PriceUpdate
from src.rush_oracle.domain.protocol import PriceOracleProtocol
from src.rush_oracle.feeds import feed_id_for
from src.rush_settlement.domain.models import GameParams, PlacementResult, ResolutionResult
from src.rush_settlement.domain.outcome import is_winning
from src.rush_settlement.rules.house_solvency import check_house_solvency
from src.rush_settlement.rules.stake_limit import check_stake_limits
from src.rush_settlement.rules.timing import check_resolve_window
from src.rush_swap.domain.protocol import SwapVenueProtocol
from src.rush_wallet.domain.repository import WalletRepositoryProtocol

logger = logging.getLogger(__name__)


class SettlementEngine:
    def __init__(
        self,
        bets: BetRepositoryProtocol,
        house: HousePoolRepositoryProtocol,
        wallets: WalletRepositoryProtocol,
        oracle: PriceOracleProtocol,
        swap: SwapVenueProtocol,
        params: GameParams | None = None,
        clock: Clock = unix_now,
        guard: OperationGuard = operation_guard,
    ) -> None:
        self._bets = bets
        self._house = house
        self._wallets = wallets
        self._oracle = oracle
        self._swap = swap
        self._params = params or GameParams.from_settings()
        self._clock = clock
        self._guard = guard

    @property
    def params(self) -> GameParams:
        return self._params

    async def place(
        self,
        db: AsyncSession,
        owner: str,
        asset: str,
        direction: str,
        stake: int,
        updates: Sequence[PriceUpdate],
        fee_paid: int,
    ) -> PlacementResult:
        """Validate, capture the strike price, collect the stake, record the bet."""
        async with self._guard.run("place"):
            try:
                result = await self._place_inner(
                    db, owner, asset, direction, stake, updates, fee_paid
                )
                await db.commit()
            except Exception:
                self._oracle.discard_staged()
                await db.rollback()
                raise
            self._oracle.commit_staged()
        bet = result.bet
        logger.info(
            "Bet placed: id=%d owner=%s %s %s stake=%d strike=%de%d resolve_at=%d",
            bet.id, bet.owner, bet.asset, bet.direction, bet.stake_amount,
            bet.strike_price, bet.strike_expo, bet.resolve_at,
        )
        return result

    async def _place_inner(
        self,
        db: AsyncSession,
        owner: str,
        asset: str,
        direction: str,
        stake: int,
        updates: Sequence[PriceUpdate],
        fee_paid: int,
    ) -> PlacementResult:
        p = self._params
        now = self._clock()

        feed_id = feed_id_for(asset)
        check_stake_limits(stake, p.min_bet, p.max_bet)
        pool = await self._house.get_for_update(db)
        check_house_solvency(pool.stable_balance, stake, p.payout_multiplier_bps)

        fee = await self._oracle.quote_update_fee(updates)
        _check_fee(fee, fee_paid)
        await self._oracle.apply_update(updates, fee, now)
        strike = await self._oracle.price_no_older_than(feed_id, p.max_price_age, now)

        # All checks passed: stage effects inside the open transaction
        await self._collect_fee(db, owner, fee_paid, fee)
        await self._wallets.debit(db, owner, p.stable_asset, stake)
        await self._house.credit_stable(db, stake)
        bet = await self._bets.create(
            db,
            owner=owner,
            asset=asset,
            direction=direction,
            stake_amount=stake,
            strike_price=strike.price,
            strike_expo=strike.expo,
            placed_at=now,
            resolve_at=now + p.resolve_delay,
        )
        return PlacementResult(bet=bet, oracle_fee=fee, fee_refund=fee_paid - fee)

    async def resolve(
        self,
        db: AsyncSession,
        bet_id: int,
        updates: Sequence[PriceUpdate],
        fee_paid: int,
        payer: str | None = None,
    ) -> ResolutionResult:
        """Settle one bet against the oracle price at its resolve instant.

        Any caller may resolve; payer funds the oracle fee and defaults to the
        bet owner. The payout always goes to the owner.
        """
        async with self._guard.run("resolve"):
            try:
                result = await self._resolve_inner(db, bet_id, updates, fee_paid, payer)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        bet = result.bet
        logger.info(
            "Bet resolved: id=%d won=%s payout=%d resolution=%de%d strike=%de%d",
            bet.id, bet.won, bet.payout_amount, result.resolution_price,
            result.resolution_expo, bet.strike_price, bet.strike_expo,
        )
        return result

    async def _resolve_inner(
        self,
        db: AsyncSession,
        bet_id: int,
        updates: Sequence[PriceUpdate],
        fee_paid: int,
        payer: str | None,
    ) -> ResolutionResult:
        p = self._params
        now = self._clock()

        await self._house.get_for_update(db)
        bet = await self._bets.get_for_update(db, bet_id)
        if bet.resolved:
            raise BetAlreadyResolvedError(bet_id)
        check_resolve_window(bet.id, bet.resolve_at, p.resolve_window, now)

        fee = await self._oracle.quote_update_fee(updates)
        _check_fee(fee, fee_paid)
        resolution = await self._oracle.price_in_window(
            feed_id_for(bet.asset),
            updates,
            fee,
            bet.resolve_at - p.price_lookback,
            bet.resolve_at + p.price_lookahead,
        )
        await self._collect_fee(db, payer or bet.owner, fee_paid, fee)

        won = is_winning(bet.direction, _strike_of(bet), resolution)
        swap_amount = 0
        payout = 0
        if won:
            swap_amount = payout_swap_amount(bet.stake_amount, p.payout_multiplier_bps)
            payout = await self._pay_winner(db, bet, swap_amount)

        resolved = await self._bets.mark_resolved(db, bet.id, won, payout)
        return ResolutionResult(
            bet=resolved,
            resolution_price=resolution.price,
            resolution_expo=resolution.expo,
            resolution_publish_time=resolution.publish_time,
            swap_amount=swap_amount,
            oracle_fee=fee,
            fee_refund=fee_paid - fee,
        )

    async def _pay_winner(self, db: AsyncSession, bet: Bet, swap_amount: int) -> int:
        """Swap swap_amount of pool stable into the payout asset and forward it all."""
        p = self._params
        pool = await self._house.get(db)
        if pool.stable_balance < swap_amount:
            raise SwapFailedError(
                f"house pool holds {pool.stable_balance}, swap needs {swap_amount}"
            )

        amount_out = await self._swap.swap_exact_input(
            p.stable_asset, p.payout_asset, swap_amount, HOUSE_ACCOUNT_ID
        )
        if amount_out < 0:
            raise SwapFailedError(f"venue reported negative output {amount_out}")
        if amount_out < p.min_swap_output:
            raise SwapFailedError(f"output {amount_out} below minimum {p.min_swap_output}")

        await self._house.record_swap(db, swap_amount, amount_out)
        await self._house.forward_payout(db, amount_out)
        await self._wallets.credit(db, bet.owner, p.payout_asset, amount_out)
        return amount_out

    async def _collect_fee(self, db: AsyncSession, payer: str, fee_paid: int, fee: int) -> None:
        """Take fee_paid from the payer, pay the oracle its fee, credit back the rest."""
        p = self._params
        if fee_paid == 0:
            return
        await self._wallets.debit(db, payer, p.fee_asset, fee_paid)
        if fee > 0:
            await self._wallets.credit(db, p.fee_account, p.fee_asset, fee)
        if fee_paid > fee:
            await self._wallets.credit(db, payer, p.fee_asset, fee_paid - fee)


def _check_fee(fee: int, fee_paid: int) -> None:
    if fee_paid < fee:
        raise OracleUpdateFailedError(f"fee paid {fee_paid} below quoted {fee}")


def _strike_of(bet: Bet) -> PriceSnapshot:
    return PriceSnapshot(
        feed_id=feed_id_for(bet.asset),
        price=bet.strike_price,
        expo=bet.strike_expo,
        publish_time=bet.placed_at,
    )
