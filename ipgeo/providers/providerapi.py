"""Provider facade over the two store backends.

A Provider holds exactly one store, selected once at startup from a
ProviderConfig, and exposes a single lookup operation. Stores are
immutable, so one Provider can be shared by any number of concurrent
callers without locking.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from ipgeo.blocks.blockstore import BlockStore
from ipgeo.config import ProviderConfig
from ipgeo.ranges.rangestore import RangeStore
from ipgeo.utils.addresses import Address

logger = logging.getLogger(__name__)

Store = Union[BlockStore, RangeStore]


@dataclass(frozen=True)
class Provider:
    store: Store

    def __post_init__(self):
        if not isinstance(self.store, (BlockStore, RangeStore)):
            raise TypeError(f"unsupported store type: {type(self.store).__name__}")

    @property
    def kind(self) -> str:
        """'herrbischoff' for a BlockStore, 'ip2location' for a RangeStore."""
        return self.store.kind

    def get_ipv4_country(self, address: Address) -> Optional[str]:
        """Return the two-letter country code for address, or None if not covered."""
        return self.store.get_ipv4_country(address)

    def summary(self) -> pd.DataFrame:
        """Count entries per country.

        Returns:
            DataFrame with columns country, entries; sorted by country
        """
        df = self.store.to_frame()
        counts = df.groupby("country").size().reset_index(name="entries")
        return counts.sort_values("country").reset_index(drop=True)


def load_provider(config: ProviderConfig) -> Provider:
    """Validate config and build the selected store.

    Args:
        config: Startup configuration selecting exactly one backend

    Returns:
        Provider wrapping a fully constructed store

    Raises:
        ConfigurationError: If zero or both backends are configured
        FileNotFoundError: If the configured path does not exist
        ParseError, ValidationError, OrderingError: If the input is malformed

    Examples:
        >>> provider = load_provider(ProviderConfig(db_path=Path("IP2LOCATION-LITE-DB1.CSV")))
        >>> provider.get_ipv4_country(IPv4Address("1.0.0.1"))
        'US'
    """
    config.validate()

    if config.repo_path is not None:
        logger.info(f"Loading country-ip-blocks repository: {config.repo_path}")
        store: Store = BlockStore.from_repo(config.repo_path)
    else:
        logger.info(f"Loading IP2Location database: {config.db_path}")
        store = RangeStore.from_db(config.db_path)

    return Provider(store)


__all__ = [
    "Provider",
    "Store",
    "load_provider",
]
