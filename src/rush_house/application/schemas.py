"""Pydantic schemas for rush_house API."""

from pydantic import BaseModel, Field

from config.settings import settings
from src.rush_common.units import to_display, usdc_to_display
from src.rush_house.domain.models import HousePool


class FundRequest(BaseModel):
    amount: int = Field(..., gt=0, description="USDC smallest units (6 decimals)")


class WithdrawRequest(BaseModel):
    amount: int = Field(..., gt=0, description="USDC smallest units (6 decimals)")


class HouseBalanceResponse(BaseModel):
    stable_balance: int
    stable_balance_display: str
    payout_balance: int
    payout_balance_display: str

    @classmethod
    def from_pool(cls, pool: HousePool) -> "HouseBalanceResponse":
        return cls(
            stable_balance=pool.stable_balance,
            stable_balance_display=usdc_to_display(pool.stable_balance),
            payout_balance=pool.payout_balance,
            payout_balance_display=f"{to_display(pool.payout_balance, settings.PAYOUT_DECIMALS)} "
            f"{settings.PAYOUT_ASSET}",
        )
