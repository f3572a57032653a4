"""Settlement domain models: game parameters and operation results."""

from dataclasses import dataclass

from config.settings import settings
from src.rush_ledger.domain.models import Bet


@dataclass(frozen=True)
class GameParams:
    min_bet: int
    max_bet: int
    payout_multiplier_bps: int
    resolve_delay: int
    resolve_window: int
    max_price_age: int
    price_lookback: int      # resolution price may be published this long before resolve_at
    price_lookahead: int     # ... or this long after
    stable_asset: str
    payout_asset: str
    min_swap_output: int = 0
    withdraw_reserve_guard: bool = False
    fee_asset: str = "ETH"             # oracle fees are paid in this asset
    fee_account: str = "pyth-oracle"   # ... and collected by this wallet

    @classmethod
    def from_settings(cls) -> "GameParams":
        return cls(
            min_bet=settings.MIN_BET,
            max_bet=settings.MAX_BET,
            payout_multiplier_bps=settings.PAYOUT_MULTIPLIER_BPS,
            resolve_delay=settings.RESOLVE_DELAY_SECONDS,
            resolve_window=settings.RESOLVE_WINDOW_SECONDS,
            max_price_age=settings.MAX_PRICE_AGE_SECONDS,
            price_lookback=settings.RESOLVE_PRICE_LOOKBACK_SECONDS,
            price_lookahead=settings.RESOLVE_PRICE_LOOKAHEAD_SECONDS,
            stable_asset=settings.STABLE_ASSET,
            payout_asset=settings.PAYOUT_ASSET,
            min_swap_output=settings.MIN_SWAP_OUTPUT,
            withdraw_reserve_guard=settings.WITHDRAW_RESERVE_GUARD,
            fee_asset=settings.ORACLE_FEE_ASSET,
            fee_account=settings.ORACLE_FEE_ACCOUNT,
        )


@dataclass
class PlacementResult:
    bet: Bet
    oracle_fee: int
    fee_refund: int   # overpayment credited back to the payer


@dataclass
class ResolutionResult:
    bet: Bet
    resolution_price: int
    resolution_expo: int
    resolution_publish_time: int
    swap_amount: int  # stable swapped out of the pool; 0 on a loss
    oracle_fee: int
    fee_refund: int
