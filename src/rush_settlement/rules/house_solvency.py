"""House solvency rules.

Placement: the pool balance BEFORE this bet's stake, plus the stake, must cover
the swap a win of this bet needs (floor of stake * multiplier). Evaluated
before the stake is collected.

Withdrawal (optional reserve guard): the pool must keep enough to cover the
swap amount of every unresolved bet that can still be resolved.
"""

from src.rush_common.errors import InsufficientHouseFundsError
from src.rush_common.units import covers_max_payout, payout_swap_amount


def check_house_solvency(pool_balance: int, stake: int, multiplier_bps: int) -> None:
    if not covers_max_payout(pool_balance, stake, multiplier_bps):
        required = payout_swap_amount(stake, multiplier_bps)
        raise InsufficientHouseFundsError(required, pool_balance + stake)


def open_liability(stakes: list[int], multiplier_bps: int) -> int:
    return sum(payout_swap_amount(stake, multiplier_bps) for stake in stakes)


def check_withdraw_reserve(pool_balance: int, amount: int, liability: int) -> None:
    if pool_balance - amount < liability:
        raise InsufficientHouseFundsError(liability + amount, pool_balance)
