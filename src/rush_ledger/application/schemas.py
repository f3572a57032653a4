"""Pydantic schemas for the bet query surface."""

from pydantic import BaseModel, Field

from config.settings import settings
from src.rush_common.units import to_display, usdc_to_display
from src.rush_ledger.domain.models import Bet


def _strike_display(price: int, expo: int) -> str:
    if expo >= 0:
        return f"{price * 10**expo:,}.00"
    return to_display(price, -expo)


class BetItem(BaseModel):
    id: int
    owner: str
    asset: str
    direction: str
    stake_amount: int
    stake_display: str
    strike_price: int
    strike_expo: int
    strike_display: str
    placed_at: int
    resolve_at: int
    resolved: bool
    won: bool
    payout_amount: int
    payout_display: str

    @classmethod
    def from_bet(cls, bet: Bet) -> "BetItem":
        return cls(
            id=bet.id,
            owner=bet.owner,
            asset=bet.asset,
            direction=bet.direction,
            stake_amount=bet.stake_amount,
            stake_display=usdc_to_display(bet.stake_amount),
            strike_price=bet.strike_price,
            strike_expo=bet.strike_expo,
            strike_display=_strike_display(bet.strike_price, bet.strike_expo),
            placed_at=bet.placed_at,
            resolve_at=bet.resolve_at,
            resolved=bet.resolved,
            won=bet.won,
            payout_amount=bet.payout_amount,
            payout_display=f"{to_display(bet.payout_amount, settings.PAYOUT_DECIMALS)} "
            f"{settings.PAYOUT_ASSET}",
        )


class BetQueryRequest(BaseModel):
    ids: list[int] = Field(..., max_length=100, description="Unknown ids yield zero records")


class BetIdsResponse(BaseModel):
    owner: str
    bet_ids: list[int]


class BetListResponse(BaseModel):
    items: list[BetItem]
