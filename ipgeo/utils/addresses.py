"""Shared IPv4 encoding helpers.

This module converts between address text, ipaddress objects and 32-bit
integers, and parses address-block literals ("203.0.113.0/24") used by
the block store.
"""

from dataclasses import dataclass, field
from ipaddress import AddressValueError, IPv4Address
from typing import Union

from ipgeo.utils.errors import AddressError, ParseError

MAX_IPV4 = 0xFFFFFFFF

Address = Union[IPv4Address, int]


def parse_ipv4(text: str) -> IPv4Address:
    """Parse dotted-quad text into an IPv4Address.

    Raises:
        AddressError: If the text is not a valid IPv4 address
    """
    try:
        return IPv4Address(text)
    except AddressValueError as e:
        raise AddressError(f"invalid IPv4 address {text!r}: {e}") from e


def address_to_int(address: Address) -> int:
    """Return the 32-bit big-endian value of an address.

    Accepts an IPv4Address or an already-encoded integer.

    Examples:
        >>> address_to_int(IPv4Address("1.0.0.0"))
        16777216
    """
    if isinstance(address, IPv4Address):
        return int.from_bytes(address.packed, "big")
    value = int(address)
    if not 0 <= value <= MAX_IPV4:
        raise ValueError(f"IPv4 value out of range: {value}")
    return value


def int_to_address(value: int) -> IPv4Address:
    return IPv4Address(value)


def prefix_mask(prefix: int) -> int:
    """Mask with the leading `prefix` bits set."""
    if prefix == 0:
        return 0
    return (MAX_IPV4 << (32 - prefix)) & MAX_IPV4


def parse_decimal_u32(text: str) -> int:
    """Parse an unsigned decimal integer that must fit in 32 bits.

    Raises:
        ParseError: If text is empty, has non-digit characters or overflows
    """
    if not text or not (text.isascii() and text.isdigit()):
        raise ParseError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value > MAX_IPV4:
        raise ParseError(f"integer {text} does not fit in 32 bits")
    return value


@dataclass(frozen=True)
class CidrBlock:
    """Network address plus prefix length.

    The mask and the masked network are computed once at construction.
    """

    network: int
    prefix: int
    mask: int = field(init=False, repr=False, compare=False)
    first: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        mask = prefix_mask(self.prefix)
        object.__setattr__(self, "mask", mask)
        object.__setattr__(self, "first", self.network & mask)

    @property
    def last(self) -> int:
        return self.first | (~self.mask & MAX_IPV4)

    def contains_value(self, value: int) -> bool:
        """Containment test for an already-encoded 32-bit value."""
        return (value & self.mask) == self.first

    def contains(self, address: Address) -> bool:
        return self.contains_value(address_to_int(address))

    def __str__(self) -> str:
        return f"{int_to_address(self.network)}/{self.prefix}"


def parse_cidr(text: str) -> CidrBlock:
    """Parse an address-block literal such as "203.0.113.0/24".

    A bare address is treated as a /32 block. Host bits beyond the prefix
    must be zero.

    Raises:
        ParseError: On malformed octets, a non-numeric prefix, a prefix
            outside [0, 32] or host bits set

    Examples:
        >>> str(parse_cidr("203.0.113.0/24"))
        '203.0.113.0/24'
    """
    addr_text, sep, prefix_text = text.partition("/")
    try:
        network = address_to_int(IPv4Address(addr_text))
    except AddressValueError as e:
        raise ParseError(f"invalid network address in {text!r}: {e}") from e

    if not sep:
        return CidrBlock(network=network, prefix=32)

    if not prefix_text or not (prefix_text.isascii() and prefix_text.isdigit()):
        raise ParseError(f"non-numeric prefix in {text!r}")
    prefix = int(prefix_text)
    if prefix > 32:
        raise ParseError(f"prefix {prefix} out of range [0, 32] in {text!r}")

    if network & ~prefix_mask(prefix) & MAX_IPV4:
        raise ParseError(f"host bits set in {text!r}")

    return CidrBlock(network=network, prefix=prefix)


__all__ = [
    "MAX_IPV4",
    "Address",
    "CidrBlock",
    "parse_ipv4",
    "parse_cidr",
    "parse_decimal_u32",
    "address_to_int",
    "int_to_address",
    "prefix_mask",
]
