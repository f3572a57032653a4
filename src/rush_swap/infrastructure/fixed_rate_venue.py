"""FixedRateSwapVenue: simulated single-route venue (USDC -> CLAWD).

amount_out = amount_in * rate // 10**input_decimals
where rate is payout-asset smallest units per one whole input token.
"""

import logging

from config.settings import settings
from src.rush_common.errors import SwapFailedError

logger = logging.getLogger(__name__)


class FixedRateSwapVenue:
    def __init__(
        self,
        rate: int | None = None,
        input_asset: str | None = None,
        output_asset: str | None = None,
        input_decimals: int | None = None,
    ) -> None:
        self._rate = rate if rate is not None else settings.SWAP_RATE_PAYOUT_PER_STABLE
        self._input_asset = input_asset or settings.STABLE_ASSET
        self._output_asset = output_asset or settings.PAYOUT_ASSET
        self._unit = 10 ** (
            input_decimals if input_decimals is not None else settings.STABLE_DECIMALS
        )

    async def swap_exact_input(
        self, input_asset: str, output_asset: str, amount_in: int, recipient: str
    ) -> int:
        if (input_asset, output_asset) != (self._input_asset, self._output_asset):
            raise SwapFailedError(f"no route {input_asset} -> {output_asset}")
        if amount_in <= 0:
            raise SwapFailedError(f"amount_in must be positive, got {amount_in}")
        amount_out = amount_in * self._rate // self._unit
        logger.info(
            "Swapped %d %s -> %d %s for %s",
            amount_in, input_asset, amount_out, output_asset, recipient,
        )
        return amount_out
