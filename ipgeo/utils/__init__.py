"""Shared utilities for the ipgeo package."""

from ipgeo.utils.addresses import (
    CidrBlock,
    address_to_int,
    int_to_address,
    parse_cidr,
    parse_decimal_u32,
    parse_ipv4,
    prefix_mask,
)
from ipgeo.utils.dataloader import (
    format_not_found_error,
    iter_lines,
    require_dir,
    require_file,
)
from ipgeo.utils.errors import (
    AddressError,
    ConfigurationError,
    IpgeoError,
    OrderingError,
    ParseError,
    ValidationError,
)
from ipgeo.utils.normalize import normalize_country_code

__all__ = [
    # Addresses
    "CidrBlock",
    "address_to_int",
    "int_to_address",
    "parse_cidr",
    "parse_decimal_u32",
    "parse_ipv4",
    "prefix_mask",
    # Data loading
    "format_not_found_error",
    "iter_lines",
    "require_dir",
    "require_file",
    # Errors
    "AddressError",
    "ConfigurationError",
    "IpgeoError",
    "OrderingError",
    "ParseError",
    "ValidationError",
    # Normalization
    "normalize_country_code",
]
