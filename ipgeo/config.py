"""Startup configuration: which backend to load and how verbose to log.

Settings are merged from explicit arguments, `IPGEO_*` environment
variables and an optional YAML file, in that order of priority. The
environment is only read, never written.
"""

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional, Union

from ipgeo.utils.errors import ConfigurationError

ENV_REPO_PATH = "IPGEO_REPO_PATH"
ENV_DB_PATH = "IPGEO_DB_PATH"
ENV_LOG_LEVEL = "IPGEO_LOG_LEVEL"
ENV_CONFIG = "IPGEO_CONFIG"

DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
CONFIG_KEYS = ("repo_path", "db_path", "log_level")


@dataclass(frozen=True)
class ProviderConfig:
    """Backend selection plus log level.

    Exactly one of repo_path (country-ip-blocks repository) and db_path
    (IP2Location CSV) must be set; see validate().
    """

    repo_path: Optional[Path] = None
    db_path: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def validate(self) -> "ProviderConfig":
        """Return self if exactly one backend and a known log level are set.

        Raises:
            ConfigurationError: Otherwise
        """
        selected = [name for name in ("repo_path", "db_path") if getattr(self, name) is not None]
        if not selected:
            raise ConfigurationError(
                "no backend configured: set exactly one of repo_path or db_path"
            )
        if len(selected) > 1:
            raise ConfigurationError(
                "repo_path and db_path are mutually exclusive: set exactly one"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"unknown log level {self.log_level!r}; use one of {', '.join(LOG_LEVELS)}"
            )
        return self

    def merged(self, **overrides) -> "ProviderConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _as_path(value) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value).expanduser()


def config_from_mapping(data: Mapping) -> ProviderConfig:
    """Build a config from a dict, e.g. parsed YAML.

    Raises:
        ConfigurationError: If data is not a mapping or has unknown keys
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"configuration must be a mapping, got {type(data).__name__}")
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ConfigurationError(f"unknown configuration keys: {unknown}")
    return ProviderConfig(
        repo_path=_as_path(data.get("repo_path")),
        db_path=_as_path(data.get("db_path")),
        log_level=str(data.get("log_level") or DEFAULT_LOG_LEVEL),
    )


def load_yaml_config(path: Union[str, Path]) -> ProviderConfig:
    """Load a config from a YAML file.

    Example file:

        db_path: /data/IP2LOCATION-LITE-DB1.CSV
        log_level: DEBUG

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigurationError: If the YAML is malformed or has unknown keys
    """
    import yaml

    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {path}: {e}") from e

    return config_from_mapping(data or {})


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> ProviderConfig:
    """Build a config from IPGEO_* environment variables."""
    env = os.environ if environ is None else environ
    return ProviderConfig(
        repo_path=_as_path(env.get(ENV_REPO_PATH)),
        db_path=_as_path(env.get(ENV_DB_PATH)),
        log_level=env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
    )


def resolve_config(
    *,
    repo_path: Optional[Union[str, Path]] = None,
    db_path: Optional[Union[str, Path]] = None,
    log_level: Optional[str] = None,
    config_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ProviderConfig:
    """Merge config file, environment and explicit arguments, then validate.

    Priority (highest first):
    1. Explicit arguments
    2. IPGEO_REPO_PATH / IPGEO_DB_PATH / IPGEO_LOG_LEVEL
    3. YAML file given by config_file or IPGEO_CONFIG

    Backend paths are taken as a group from the highest-priority source
    that sets any of them, so a file's db_path cannot combine with an
    argument's repo_path.

    Raises:
        ConfigurationError: If the merged result does not select exactly one backend
    """
    env = os.environ if environ is None else environ

    config = ProviderConfig()
    config_file = config_file or env.get(ENV_CONFIG)
    if config_file:
        config = load_yaml_config(config_file)

    for layer in (
        config_from_env(env),
        ProviderConfig(repo_path=_as_path(repo_path), db_path=_as_path(db_path)),
    ):
        if layer.repo_path is not None or layer.db_path is not None:
            config = replace(config, repo_path=layer.repo_path, db_path=layer.db_path)

    config = config.merged(log_level=env.get(ENV_LOG_LEVEL) or None)
    config = config.merged(log_level=log_level)

    return config.validate()


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


__all__ = [
    "ProviderConfig",
    "config_from_env",
    "config_from_mapping",
    "configure_logging",
    "load_yaml_config",
    "resolve_config",
]
