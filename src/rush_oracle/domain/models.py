"""Oracle domain models: fixed-point price snapshots and update payloads."""

from dataclasses import dataclass
from typing import Any


def normalize_feed_id(feed_id: str) -> str:
    """Hermes returns ids without the 0x prefix; compare them in one form."""
    return feed_id.lower().removeprefix("0x")


@dataclass(frozen=True)
class PriceUpdate:
    """One signed-by-the-oracle price publication, as delivered by Hermes."""
    feed_id: str
    price: int
    expo: int
    publish_time: int

    @classmethod
    def from_hermes(cls, entry: dict[str, Any]) -> "PriceUpdate":
        """From a Hermes `parsed` entry: {"id", "price": {"price", "expo", "publish_time"}}."""
        price = entry["price"]
        return cls(
            feed_id=normalize_feed_id(entry["id"]),
            price=int(price["price"]),
            expo=int(price["expo"]),
            publish_time=int(price["publish_time"]),
        )


@dataclass(frozen=True)
class PriceSnapshot:
    """value = price * 10**expo"""
    feed_id: str
    price: int
    expo: int
    publish_time: int

    def mantissa_at(self, expo: int) -> int:
        """Mantissa rescaled to a finer (smaller or equal) exponent, losslessly."""
        if expo > self.expo:
            raise ValueError(f"Cannot rescale expo {self.expo} to coarser {expo} losslessly")
        return self.price * 10 ** (self.expo - expo)


def compare_prices(a: PriceSnapshot, b: PriceSnapshot) -> int:
    """Sign of (a - b) after normalising both to the finer exponent: -1, 0 or 1."""
    expo = min(a.expo, b.expo)
    lhs, rhs = a.mantissa_at(expo), b.mantissa_at(expo)
    return (lhs > rhs) - (lhs < rhs)
