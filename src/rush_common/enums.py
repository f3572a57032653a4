"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class Asset(str, Enum):
    """Assets a bet can be placed on. Each maps to one oracle feed."""
    ETH = "ETH"
    BTC = "BTC"


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
