"""Tests for startup configuration."""

import logging
import os
from pathlib import Path

import pytest

from ipgeo.config import (
    ProviderConfig,
    config_from_env,
    config_from_mapping,
    configure_logging,
    load_yaml_config,
    resolve_config,
)
from ipgeo.utils.errors import ConfigurationError


class TestProviderConfig:
    """Test validation of backend selection"""

    def test_exactly_one_backend(self):
        config = ProviderConfig(db_path=Path("db.csv"))
        assert config.validate() is config

    def test_zero_backends(self):
        with pytest.raises(ConfigurationError):
            ProviderConfig().validate()

    def test_two_backends(self):
        with pytest.raises(ConfigurationError):
            ProviderConfig(repo_path=Path("repo"), db_path=Path("db.csv")).validate()

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError, match="log level"):
            ProviderConfig(db_path=Path("db.csv"), log_level="LOUD").validate()

    def test_log_level_case_insensitive(self):
        ProviderConfig(db_path=Path("db.csv"), log_level="debug").validate()

    def test_merged_skips_none(self):
        config = ProviderConfig(db_path=Path("db.csv")).merged(log_level=None, repo_path=None)
        assert config == ProviderConfig(db_path=Path("db.csv"))


class TestConfigSources:
    """Test reading configuration from env, mappings and YAML"""

    def test_from_env(self):
        config = config_from_env({"IPGEO_DB_PATH": "/data/db.csv", "IPGEO_LOG_LEVEL": "DEBUG"})
        assert config.db_path == Path("/data/db.csv")
        assert config.repo_path is None
        assert config.log_level == "DEBUG"

    def test_from_env_empty_values(self):
        config = config_from_env({"IPGEO_REPO_PATH": "", "IPGEO_DB_PATH": "/data/db.csv"})
        assert config.repo_path is None

    def test_from_mapping_unknown_key(self):
        with pytest.raises(ConfigurationError, match="port"):
            config_from_mapping({"db_path": "db.csv", "port": 3000})

    def test_from_mapping_not_a_mapping(self):
        with pytest.raises(ConfigurationError):
            config_from_mapping(["db_path"])

    def test_yaml(self, tmp_path):
        path = tmp_path / "ipgeo.yaml"
        path.write_text("repo_path: /srv/country-ip-blocks\nlog_level: WARNING\n", encoding="utf-8")
        config = load_yaml_config(path)
        assert config.repo_path == Path("/srv/country-ip-blocks")
        assert config.log_level == "WARNING"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "ipgeo.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml_config(path) == ProviderConfig()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "ipgeo.yaml"
        path.write_text("db_path: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_yaml_config(path)

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "missing.yaml")


class TestResolveConfig:
    """Test priority of configuration sources"""

    def test_arguments_only(self):
        config = resolve_config(db_path="db.csv", environ={})
        assert config.db_path == Path("db.csv")
        assert config.log_level == "INFO"

    def test_nothing_configured(self):
        with pytest.raises(ConfigurationError):
            resolve_config(environ={})

    def test_both_arguments(self):
        with pytest.raises(ConfigurationError):
            resolve_config(repo_path="repo", db_path="db.csv", environ={})

    def test_both_env_vars(self):
        with pytest.raises(ConfigurationError):
            resolve_config(environ={"IPGEO_REPO_PATH": "repo", "IPGEO_DB_PATH": "db.csv"})

    def test_argument_overrides_env_backend(self):
        """Test an argument backend replaces, not joins, the env backend"""
        config = resolve_config(repo_path="repo", environ={"IPGEO_DB_PATH": "db.csv"})
        assert config.repo_path == Path("repo")
        assert config.db_path is None

    def test_env_overrides_file(self, tmp_path):
        path = tmp_path / "ipgeo.yaml"
        path.write_text("db_path: file.csv\nlog_level: DEBUG\n", encoding="utf-8")
        config = resolve_config(
            config_file=path,
            environ={"IPGEO_REPO_PATH": "repo", "IPGEO_LOG_LEVEL": "ERROR"},
        )
        assert config.repo_path == Path("repo")
        assert config.db_path is None
        assert config.log_level == "ERROR"

    def test_config_file_from_env(self, tmp_path):
        path = tmp_path / "ipgeo.yaml"
        path.write_text("db_path: file.csv\nlog_level: DEBUG\n", encoding="utf-8")
        config = resolve_config(environ={"IPGEO_CONFIG": str(path)})
        assert config.db_path == Path("file.csv")
        assert config.log_level == "DEBUG"

    def test_log_level_argument_wins(self):
        config = resolve_config(
            db_path="db.csv", log_level="WARNING", environ={"IPGEO_LOG_LEVEL": "DEBUG"}
        )
        assert config.log_level == "WARNING"

    def test_env_is_not_modified(self, monkeypatch):
        monkeypatch.delenv("IPGEO_LOG_LEVEL", raising=False)
        resolve_config(db_path="db.csv", log_level="DEBUG", environ={})
        assert "IPGEO_LOG_LEVEL" not in os.environ


class TestConfigureLogging:
    """Test explicit logging setup"""

    def test_sets_root_level(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", logging.WARNING)
        configure_logging("debug")
        assert root.level == logging.DEBUG
