"""ipgeo - IPv4 to country lookup

Public API for resolving IPv4 addresses to ISO 3166-1 alpha-2 country codes
from one of two file-backed stores built once at startup.

Usage:
    from ipaddress import IPv4Address
    from ipgeo import ProviderConfig, load_provider

    # Country-ip-blocks repository (ipv4/<cc>.cidr files)
    provider = load_provider(ProviderConfig(repo_path=Path("country-ip-blocks")))

    # IP2Location LITE DB1 CSV
    provider = load_provider(ProviderConfig(db_path=Path("IP2LOCATION-LITE-DB1.CSV")))

    provider.get_ipv4_country(IPv4Address("1.0.0.1"))  # Returns: 'US' or None
"""

__version__ = "0.1.0"

# ============================================================================
# Provider API
# ============================================================================

from .providers.providerapi import (
    Provider,        # Holds exactly one store, one lookup operation
    load_provider,   # Primary API - build the configured store
)

from .config import (
    ProviderConfig,    # Backend selection and log level
    resolve_config,    # Merge arguments, environment and YAML file
    configure_logging, # Configure root logging at a given level
)

# ============================================================================
# Stores
# ============================================================================

from .blocks.blockstore import BlockStore   # Linear scan over address blocks
from .ranges.rangestore import RangeStore   # Binary search over sorted ranges

# ============================================================================
# Addresses and errors
# ============================================================================

from .utils.addresses import parse_ipv4, address_to_int
from .utils.errors import (
    IpgeoError,
    ParseError,
    AddressError,
    ValidationError,
    OrderingError,
    ConfigurationError,
)

__all__ = [
    # Version
    "__version__",

    # Provider
    "Provider",
    "load_provider",
    "ProviderConfig",
    "resolve_config",
    "configure_logging",

    # Stores
    "BlockStore",
    "RangeStore",

    # Addresses
    "parse_ipv4",
    "address_to_int",

    # Errors
    "IpgeoError",
    "ParseError",
    "AddressError",
    "ValidationError",
    "OrderingError",
    "ConfigurationError",
]
