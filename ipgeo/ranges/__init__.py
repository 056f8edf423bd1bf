"""Sorted IP range store."""

from ipgeo.ranges.rangestore import (
    UNASSIGNED,
    IpRange,
    RangeStore,
    parse_row,
    split_row,
    validate_ranges,
)

__all__ = [
    "UNASSIGNED",
    "IpRange",
    "RangeStore",
    "parse_row",
    "split_row",
    "validate_ranges",
]
