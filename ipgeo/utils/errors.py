"""Error taxonomy for store construction and configuration.

Every error raised while building a store or selecting a backend derives
from IpgeoError. They are all fatal at startup: a store is either fully
built or not built at all.
"""


class IpgeoError(ValueError):
    """Base class for all ipgeo errors."""


class ParseError(IpgeoError):
    """Malformed numeric value, address-block literal or delimited row."""


class AddressError(ParseError):
    """Invalid IPv4 address text."""


class ValidationError(IpgeoError):
    """Country code is not exactly two characters."""


class OrderingError(IpgeoError):
    """Interval does not start strictly after the previous retained interval."""


class ConfigurationError(IpgeoError):
    """Zero or more than one backend selected, or an invalid setting."""


__all__ = [
    "IpgeoError",
    "ParseError",
    "AddressError",
    "ValidationError",
    "OrderingError",
    "ConfigurationError",
]
