"""Static asset -> oracle feed id registry (one entry per supported asset)."""

from config.settings import settings
from src.rush_common.enums import Asset
from src.rush_common.errors import InvalidAssetError
from src.rush_oracle.domain.models import normalize_feed_id

FEED_IDS: dict[str, str] = {
    Asset.ETH.value: normalize_feed_id(settings.ETH_FEED_ID),
    Asset.BTC.value: normalize_feed_id(settings.BTC_FEED_ID),
}


def feed_id_for(asset: str) -> str:
    """Raise InvalidAssetError when asset has no registered feed."""
    feed_id = FEED_IDS.get(asset)
    if feed_id is None:
        raise InvalidAssetError(asset)
    return feed_id
