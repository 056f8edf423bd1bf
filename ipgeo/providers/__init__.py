"""Backend selection and the single lookup operation."""

from ipgeo.providers.providerapi import (
    Provider,
    Store,
    load_provider,
)

__all__ = [
    "Provider",
    "Store",
    "load_provider",
]
