"""Per-country address-block store."""

from ipgeo.blocks.blockstore import (
    BLOCK_FILE_SUFFIX,
    BlockEntry,
    BlockStore,
    country_from_filename,
)

__all__ = [
    "BLOCK_FILE_SUFFIX",
    "BlockEntry",
    "BlockStore",
    "country_from_filename",
]
