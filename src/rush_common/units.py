"""Integer arithmetic for token amounts and payouts.

All stakes, balances and payouts are int in the token's smallest unit
(USDC: 6 decimals, CLAWD: 18 decimals). No float, no Decimal.
"""

BPS_DENOMINATOR = 10_000


def to_display(amount: int, decimals: int, places: int = 2) -> str:
    """Render a smallest-unit amount: (10_500_000, 6) -> '10.50'.

    Truncates toward zero; never rounds up a balance the holder does not own.
    """
    sign = "-" if amount < 0 else ""
    whole, frac = divmod(abs(amount), 10**decimals)
    if places == 0:
        return f"{sign}{whole:,}"
    frac_str = f"{frac:0{decimals}d}"[:places].ljust(places, "0")
    return f"{sign}{whole:,}.{frac_str}"


def usdc_to_display(amount: int) -> str:
    """6-decimal USDC units to a dollar string: 10_000_000 -> '$10.00'."""
    text = to_display(amount, 6)
    if text.startswith("-"):
        return f"-${text[1:]}"
    return f"${text}"


def payout_swap_amount(stake: int, multiplier_bps: int) -> int:
    """Stable amount swapped into the payout asset for a winning stake.

    swap_amount = floor(stake * multiplier_bps / 10000)
    """
    return stake * multiplier_bps // BPS_DENOMINATOR


def covers_max_payout(pool_balance: int, stake: int, multiplier_bps: int) -> bool:
    """True when pool_balance + stake covers the swap a win of this stake needs.

    Bounded by payout_swap_amount (floored), the amount resolution actually
    takes from the pool.
    """
    return pool_balance + stake >= payout_swap_amount(stake, multiplier_bps)
