"""Pydantic schemas for rush_wallet API."""

from pydantic import BaseModel, Field, field_validator

from config.settings import settings
from src.rush_common.units import to_display, usdc_to_display


class DepositRequest(BaseModel):
    amount: int = Field(..., gt=0, description="Amount in the asset's smallest units")
    asset: str = Field(
        default=settings.STABLE_ASSET,
        description="Stable asset for stakes, or the native asset that pays oracle fees",
    )

    @field_validator("asset")
    @classmethod
    def check_depositable(cls, v: str) -> str:
        allowed = (settings.STABLE_ASSET, settings.ORACLE_FEE_ASSET)
        if v not in allowed:
            raise ValueError(f"asset must be one of {', '.join(allowed)}")
        return v


class WalletBalanceResponse(BaseModel):
    holder: str
    stable_balance: int
    stable_balance_display: str
    payout_balance: int
    payout_balance_display: str
    native_balance: int
    native_balance_display: str

    @classmethod
    def from_units(
        cls, holder: str, stable: int, payout: int, native: int
    ) -> "WalletBalanceResponse":
        return cls(
            holder=holder,
            stable_balance=stable,
            stable_balance_display=usdc_to_display(stable),
            payout_balance=payout,
            payout_balance_display=f"{to_display(payout, settings.PAYOUT_DECIMALS)} "
            f"{settings.PAYOUT_ASSET}",
            native_balance=native,
            native_balance_display=f"{to_display(native, settings.ORACLE_FEE_DECIMALS, 6)} "
            f"{settings.ORACLE_FEE_ASSET}",
        )
