"""Domain model for the house pool: pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime

HOUSE_ACCOUNT_ID = "HOUSE"  # swap recipient identity for pool-owned proceeds


@dataclass
class HousePool:
    stable_balance: int    # USDC smallest units, absorbs stakes, funds payouts
    payout_balance: int    # CLAWD smallest units, transit only (swap in, forward out)
    version: int = 0
    updated_at: datetime | None = None
