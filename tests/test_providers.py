"""Tests for the provider facade."""

from ipaddress import IPv4Address

import pytest

from ipgeo import BlockStore, Provider, ProviderConfig, RangeStore, load_provider
from ipgeo.utils.errors import ConfigurationError, OrderingError


class TestLoadProvider:
    """Test backend selection"""

    def test_repo_backend(self, block_repo):
        provider = load_provider(ProviderConfig(repo_path=block_repo))
        assert isinstance(provider.store, BlockStore)
        assert provider.kind == "herrbischoff"

    def test_db_backend(self, range_db):
        provider = load_provider(ProviderConfig(db_path=range_db))
        assert isinstance(provider.store, RangeStore)
        assert provider.kind == "ip2location"

    def test_no_backend(self):
        with pytest.raises(ConfigurationError, match="no backend"):
            load_provider(ProviderConfig())

    def test_both_backends(self, block_repo, range_db):
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            load_provider(ProviderConfig(repo_path=block_repo, db_path=range_db))

    def test_construction_errors_propagate(self, make_db):
        db = make_db([(100, 200, "US"), (150, 300, "CA")])
        with pytest.raises(OrderingError):
            load_provider(ProviderConfig(db_path=db))

    def test_unsupported_store(self):
        with pytest.raises(TypeError):
            Provider(store={"1.0.0.0/24": "US"})


class TestProviderLookup:
    """Test the single lookup operation forwards to the store"""

    def test_block_lookup(self, block_repo):
        provider = load_provider(ProviderConfig(repo_path=block_repo))
        assert provider.get_ipv4_country(IPv4Address("203.0.113.5")) == "US"
        assert provider.get_ipv4_country(IPv4Address("8.8.8.8")) is None

    def test_range_lookup(self, range_db):
        provider = load_provider(ProviderConfig(db_path=range_db))
        assert provider.get_ipv4_country(IPv4Address("1.0.0.1")) == "US"
        assert provider.get_ipv4_country(16777500) is None

    def test_forwards_store_result(self, range_db):
        store = RangeStore.from_db(range_db)
        provider = Provider(store)
        for value in range(16777000, 16781500, 113):
            assert provider.get_ipv4_country(value) == store.get_ipv4_country(value)


class TestProviderSummary:
    """Test per-country summary"""

    def test_block_summary(self, block_repo):
        df = load_provider(ProviderConfig(repo_path=block_repo)).summary()
        assert list(df.columns) == ["country", "entries"]
        assert df["country"].tolist() == ["CA", "US"]
        assert df["entries"].tolist() == [2, 2]

    def test_range_summary(self, range_db):
        df = load_provider(ProviderConfig(db_path=range_db)).summary()
        assert df["country"].tolist() == ["AU", "CN", "US"]
        assert df["entries"].sum() == 3

    def test_empty_summary(self):
        df = Provider(RangeStore([])).summary()
        assert df.empty
