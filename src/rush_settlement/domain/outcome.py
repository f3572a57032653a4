"""Win/loss determination.

UP wins iff resolution > strike; DOWN wins iff resolution < strike.
Equal prices lose for both directions. Snapshots with different exponents are
compared after lossless rescaling to the finer exponent.
"""

from src.rush_common.enums import Direction
from src.rush_oracle.domain.models import PriceSnapshot, compare_prices


def is_winning(direction: str, strike: PriceSnapshot, resolution: PriceSnapshot) -> bool:
    move = compare_prices(resolution, strike)
    if direction == Direction.UP:
        return move > 0
    if direction == Direction.DOWN:
        return move < 0
    raise ValueError(f"Unknown direction: {direction}")
