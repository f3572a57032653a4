from src.rush_common.errors import BetTooLargeError, BetTooSmallError


def check_stake_limits(stake: int, min_bet: int, max_bet: int) -> None:
    """Raise BetTooSmallError / BetTooLargeError unless stake in [min_bet, max_bet]."""
    if stake < min_bet:
        raise BetTooSmallError(stake, min_bet)
    if stake > max_bet:
        raise BetTooLargeError(stake, max_bet)
