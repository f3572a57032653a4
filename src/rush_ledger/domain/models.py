"""Bet domain model: pure dataclass, no SQLAlchemy dependency."""

from dataclasses import dataclass


@dataclass
class Bet:
    id: int                  # BIGSERIAL, starts at 1, never reused
    owner: str
    asset: str               # Asset value
    direction: str           # Direction value
    stake_amount: int        # USDC smallest units
    strike_price: int        # mantissa: value = strike_price * 10**strike_expo
    strike_expo: int
    placed_at: int           # unix seconds
    resolve_at: int          # placed_at + RESOLVE_DELAY, fixed at creation
    resolved: bool = False
    won: bool = False        # meaningful only when resolved
    payout_amount: int = 0   # CLAWD smallest units; > 0 implies won

    @classmethod
    def empty(cls) -> "Bet":
        """Zero-valued record returned for ids that were never allocated."""
        return cls(
            id=0,
            owner="",
            asset="",
            direction="",
            stake_amount=0,
            strike_price=0,
            strike_expo=0,
            placed_at=0,
            resolve_at=0,
        )
