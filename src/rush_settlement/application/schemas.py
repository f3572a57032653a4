"""Pydantic schemas for placement and resolution endpoints.

Requests carry no prices. The server fetches every price update from Hermes
itself, and unknown fields are rejected rather than ignored.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.rush_common.enums import Asset, Direction
from src.rush_ledger.application.schemas import BetItem
from src.rush_settlement.domain.models import PlacementResult, ResolutionResult

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class PlaceBetRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    asset: Asset
    direction: Direction
    stake: int = Field(..., description="USDC smallest units (6 decimals)")
    fee_paid: int | None = Field(
        None, ge=0, description="Oracle fee taken from the caller's wallet; defaults to the quote"
    )


class ResolveBetRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fee_paid: int | None = Field(None, ge=0)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PlaceBetResponse(BaseModel):
    bet: BetItem
    oracle_fee: int
    fee_refund: int

    @classmethod
    def from_result(cls, result: PlacementResult) -> "PlaceBetResponse":
        return cls(
            bet=BetItem.from_bet(result.bet),
            oracle_fee=result.oracle_fee,
            fee_refund=result.fee_refund,
        )


class ResolveBetResponse(BaseModel):
    bet: BetItem
    resolution_price: int
    resolution_expo: int
    resolution_publish_time: int
    swap_amount: int
    oracle_fee: int
    fee_refund: int

    @classmethod
    def from_result(cls, result: ResolutionResult) -> "ResolveBetResponse":
        return cls(
            bet=BetItem.from_bet(result.bet),
            resolution_price=result.resolution_price,
            resolution_expo=result.resolution_expo,
            resolution_publish_time=result.resolution_publish_time,
            swap_amount=result.swap_amount,
            oracle_fee=result.oracle_fee,
            fee_refund=result.fee_refund,
        )
