"""Block store backed by per-country address-block files.

Loads a country-ip-blocks style repository, where `ipv4/<cc>.cidr` lists
one address block per line for country `cc`, and answers lookups with a
linear containment scan.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from ipgeo.utils.addresses import Address, CidrBlock, address_to_int, int_to_address, parse_cidr
from ipgeo.utils.dataloader import iter_lines, require_dir
from ipgeo.utils.errors import ParseError
from ipgeo.utils.normalize import normalize_country_code

logger = logging.getLogger(__name__)

BLOCK_FILE_SUFFIX = ".cidr"


@dataclass(frozen=True)
class BlockEntry:
    block: CidrBlock
    country: str


def country_from_filename(path: Path) -> str:
    """Derive the country code from the text before the first '.' of a file name.

    Raises:
        ValidationError: If that text is not exactly two characters

    Examples:
        >>> country_from_filename(Path("ipv4/us.cidr"))
        'US'
    """
    code, _, _ = path.name.partition(".")
    return normalize_country_code(code, source=str(path))


def _load_block_file(path: Path) -> List[BlockEntry]:
    country = country_from_filename(path)
    entries = []
    for lineno, line in iter_lines(path):
        try:
            block = parse_cidr(line)
        except ParseError as e:
            raise ParseError(f"{path}:{lineno}: {e}") from e
        entries.append(BlockEntry(block=block, country=country))
    logger.debug(f"Loaded {len(entries)} blocks for {country} from {path}")
    return entries


class BlockStore:
    """Unordered collection of (address block, country) entries.

    Lookups scan every entry in load order and return the first match,
    so a query costs O(n) in the number of blocks. Blocks from separate
    country files are not assumed to form one disjoint partition, so no
    sorted index is built.

    Examples:
        >>> store = BlockStore.from_repo("country-ip-blocks")
        >>> store.get_ipv4_country(IPv4Address("203.0.113.5"))
        'US'
    """

    kind = "herrbischoff"

    def __init__(self, entries: Iterable[BlockEntry]):
        """Hold entries in the given order, uppercasing each country code.

        Raises:
            ValidationError: If a country code is not exactly two characters
        """
        self._entries: Tuple[BlockEntry, ...] = tuple(
            BlockEntry(block=e.block, country=normalize_country_code(e.country, source=str(e.block)))
            for e in entries
        )

    @classmethod
    def from_files(cls, paths: Iterable[Union[str, Path]]) -> "BlockStore":
        """Build a store from block files, loaded in the given order."""
        entries: List[BlockEntry] = []
        n_files = 0
        for path in paths:
            entries.extend(_load_block_file(Path(path)))
            n_files += 1
        logger.info(f"Loaded {len(entries)} address blocks from {n_files} files")
        return cls(entries)

    @classmethod
    def from_repo(cls, repo_path: Union[str, Path]) -> "BlockStore":
        """Build a store from `<repo_path>/ipv4/*.cidr`.

        Files are loaded sorted by file name so that the first-match result
        for overlapping blocks does not depend on directory listing order.

        Raises:
            FileNotFoundError: If `<repo_path>/ipv4` is not a directory
            ValidationError: If a file name does not start with a two-letter code
            ParseError: If any line is not a valid address-block literal
        """
        ipv4_dir = require_dir(
            Path(repo_path) / "ipv4",
            what="country-ip-blocks ipv4",
            fix_instructions=[
                "Clone https://github.com/herrbischoff/country-ip-blocks",
                "Point --repo-path (or IPGEO_REPO_PATH) at the clone's root directory",
            ],
        )
        paths = sorted(
            (p for p in ipv4_dir.iterdir() if p.suffix == BLOCK_FILE_SUFFIX and p.is_file()),
            key=lambda p: p.name,
        )
        return cls.from_files(paths)

    @property
    def entries(self) -> Tuple[BlockEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get_ipv4_country(self, address: Address) -> Optional[str]:
        """Return the country of the first block containing address, or None."""
        value = address_to_int(address)
        for entry in self._entries:
            if entry.block.contains_value(value):
                return entry.country
        return None

    def countries(self) -> List[str]:
        return sorted({entry.country for entry in self._entries})

    def to_frame(self) -> pd.DataFrame:
        """Return the blocks as a DataFrame in load order.

        Columns: network, prefix, first, last, country. `first` and `last`
        are dotted-quad bounds of each block.
        """
        return pd.DataFrame(
            [
                {
                    "network": str(int_to_address(e.block.network)),
                    "prefix": e.block.prefix,
                    "first": str(int_to_address(e.block.first)),
                    "last": str(int_to_address(e.block.last)),
                    "country": e.country,
                }
                for e in self._entries
            ],
            columns=["network", "prefix", "first", "last", "country"],
        )


__all__ = [
    "BLOCK_FILE_SUFFIX",
    "BlockEntry",
    "BlockStore",
    "country_from_filename",
]
