"""Swap venue capability Protocol.

swap_exact_input converts exactly amount_in of input_asset and returns the
output amount delivered to recipient. No minimum output is enforced here;
any failure (liquidity, route, approval) raises SwapFailedError.
"""

from typing import Protocol


class SwapVenueProtocol(Protocol):
    async def swap_exact_input(
        self, input_asset: str, output_asset: str, amount_in: int, recipient: str
    ) -> int: ...
