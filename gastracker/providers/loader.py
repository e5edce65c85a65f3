from gastracker.config import Settings
from gastracker.providers.base import PriceSource
from gastracker.providers.etherscan import EtherscanPriceSource


def get_price_source(settings: Settings) -> PriceSource:
    """
    Price source factory.

    Etherscan is the only supported source; this is the single place that
    knows about concrete sources.
    """
    return EtherscanPriceSource(
        api_key=settings.etherscan_api_key,
        base_url=settings.etherscan_base_url,
        timeout_s=settings.etherscan_timeout_seconds,
    )
