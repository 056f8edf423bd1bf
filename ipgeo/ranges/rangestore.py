"""Sorted range store backed by an IP2Location style CSV file.

Each row is `"<start>","<end>","<country>"` with optional trailing fields.
Rows whose country is the "-" sentinel are dropped. Retained rows must be
strictly increasing and non-overlapping; lookups binary-search the starts.
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from ipgeo.utils.addresses import Address, address_to_int, parse_decimal_u32
from ipgeo.utils.dataloader import iter_lines, require_file
from ipgeo.utils.errors import OrderingError, ParseError, ValidationError
from ipgeo.utils.normalize import normalize_country_code

logger = logging.getLogger(__name__)

UNASSIGNED = "-"
FIELD_SEPARATOR = '","'


@dataclass(frozen=True)
class IpRange:
    start: int
    end: int
    country: str

    def __contains__(self, value: int) -> bool:
        return self.start <= value <= self.end


def split_row(line: str) -> List[str]:
    """Split a quoted CSV row into its unquoted fields.

    Examples:
        >>> split_row('"16777216","16777471","US","United States of America"')
        ['16777216', '16777471', 'US', 'United States of America']
    """
    return [col.strip('"') for col in line.split(FIELD_SEPARATOR)]


def parse_row(fields: List[str]) -> Optional[IpRange]:
    """Parse split fields into an IpRange, or None for the unassigned sentinel.

    Raises:
        ParseError: If there are fewer than three fields or start/end are
            not unsigned 32-bit decimals
        ValidationError: If the country code is not two characters
    """
    if len(fields) < 3:
        raise ParseError(f"invalid row: expected at least 3 fields, got {len(fields)}")

    start = parse_decimal_u32(fields[0])
    end = parse_decimal_u32(fields[1])
    country = fields[2]

    if country == UNASSIGNED:
        return None

    return IpRange(start=start, end=end, country=normalize_country_code(country))


def validate_ranges(ranges: Iterable[IpRange]) -> Tuple[IpRange, ...]:
    """Uppercase country codes and check each range starts after the previous one ends.

    Comparing every range against its immediate predecessor is enough to
    make the whole sequence sorted and pairwise disjoint.

    Raises:
        ValidationError: If a country code is not exactly two characters
        OrderingError: On an inverted range or an out-of-order/overlapping one
    """
    validated: List[IpRange] = []
    for i, r in enumerate(ranges):
        where = f"range {i}"
        r = IpRange(start=r.start, end=r.end, country=normalize_country_code(r.country, source=where))
        _check_order(r, validated[-1] if validated else None, where)
        validated.append(r)
    return tuple(validated)


def _check_order(r: IpRange, previous: Optional[IpRange], where: str) -> None:
    if r.start > r.end:
        raise OrderingError(f"{where}: start {r.start} is greater than end {r.end}")
    if previous is not None and r.start <= previous.end:
        raise OrderingError(
            f"{where}: list not sorted, start {r.start} <= previous end {previous.end}"
        )


class RangeStore:
    """Validated, strictly ordered list of (start, end, country) intervals.

    Lookups cost O(log n): an exact match on a start returns directly;
    otherwise the interval just before the insertion point either covers
    the value or the value lies in an unassigned gap.

    Examples:
        >>> store = RangeStore.from_db("IP2LOCATION-LITE-DB1.CSV")
        >>> store.get_ipv4_country(16777300)
        'US'
    """

    kind = "ip2location"

    def __init__(self, ranges: Iterable[IpRange]):
        """Validate ranges with validate_ranges() and index their starts."""
        self._set_ranges(validate_ranges(ranges))

    def _set_ranges(self, ranges: Tuple[IpRange, ...]) -> None:
        self._ranges: Tuple[IpRange, ...] = ranges
        self._starts: Tuple[int, ...] = tuple(r.start for r in ranges)

    @classmethod
    def _from_validated(cls, ranges: Iterable[IpRange]) -> "RangeStore":
        store = cls.__new__(cls)
        store._set_ranges(tuple(ranges))
        return store

    @classmethod
    def from_lines(cls, lines: Iterable[Tuple[int, str]], source: str = "<input>") -> "RangeStore":
        """Build a store from (line_number, line) pairs.

        Raises:
            ParseError, ValidationError, OrderingError: On the first bad row,
                with source and line number in the message
        """
        ranges: List[IpRange] = []
        dropped = 0
        for lineno, line in lines:
            where = f"{source}:{lineno}"
            try:
                r = parse_row(split_row(line))
            except (ParseError, ValidationError) as e:
                raise type(e)(f"{where}: {e}") from e

            if r is None:
                dropped += 1
                continue

            _check_order(r, ranges[-1] if ranges else None, where)
            ranges.append(r)

        logger.debug(f"Dropped {dropped} unassigned rows from {source}")
        return cls._from_validated(ranges)

    @classmethod
    def from_db(cls, db_path: Union[str, Path]) -> "RangeStore":
        """Build a store from an IP2Location LITE DB1 CSV file.

        Raises:
            FileNotFoundError: If db_path is not a file
            ParseError, ValidationError, OrderingError: On the first bad row
        """
        path = require_file(
            db_path,
            what="IP2Location database",
            fix_instructions=[
                "Download IP2LOCATION-LITE-DB1.CSV from https://lite.ip2location.com",
                "Point --db-path (or IPGEO_DB_PATH) at the extracted CSV file",
            ],
        )
        store = cls.from_lines(iter_lines(path), source=str(path))
        logger.info(f"Loaded {len(store)} IP ranges from {path}")
        return store

    @property
    def ranges(self) -> Tuple[IpRange, ...]:
        return self._ranges

    def __len__(self) -> int:
        return len(self._ranges)

    def get_ipv4_country(self, address: Address) -> Optional[str]:
        """Return the country of the interval covering address, or None."""
        value = address_to_int(address)
        i = bisect_left(self._starts, value)

        if i < len(self._starts) and self._starts[i] == value:
            return self._ranges[i].country

        if i == 0:
            # Precedes every interval
            return None

        closest = self._ranges[i - 1]
        if closest.end >= value:
            return closest.country
        # Gap between two intervals
        return None

    def countries(self) -> List[str]:
        return sorted({r.country for r in self._ranges})

    def to_frame(self) -> pd.DataFrame:
        """Return the intervals as a DataFrame with columns start, end, country."""
        return pd.DataFrame(
            [(r.start, r.end, r.country) for r in self._ranges],
            columns=["start", "end", "country"],
        )


__all__ = [
    "UNASSIGNED",
    "IpRange",
    "RangeStore",
    "parse_row",
    "split_row",
    "validate_ranges",
]
