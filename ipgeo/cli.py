"""Command-line front end for ipgeo.

Builds one provider at startup and answers lookups against it.

Usage:
    # Country-ip-blocks repository backend
    ipgeo --repo-path ~/country-ip-blocks lookup 203.0.113.5 8.8.8.8

    # IP2Location CSV backend
    ipgeo --db-path IP2LOCATION-LITE-DB1.CSV lookup 1.0.0.1

    # Entries per country
    ipgeo --db-path IP2LOCATION-LITE-DB1.CSV summary

Environment Variables:
    IPGEO_REPO_PATH: Country-ip-blocks repository root
    IPGEO_DB_PATH: IP2Location CSV file
    IPGEO_LOG_LEVEL: Log level (default: INFO)
    IPGEO_CONFIG: YAML config file with repo_path, db_path, log_level
"""

import argparse
import logging
import sys
from typing import List, Optional

from ipgeo.config import LOG_LEVELS, configure_logging, resolve_config
from ipgeo.providers.providerapi import Provider, load_provider
from ipgeo.utils.addresses import parse_ipv4
from ipgeo.utils.errors import AddressError, ConfigurationError, IpgeoError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipgeo",
        description="Resolve IPv4 addresses to two-letter country codes",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", help="YAML config file (repo_path, db_path, log_level)")
    parser.add_argument("--repo-path", help="Path to the country-ip-blocks repository")
    parser.add_argument("--db-path", help="Path to the IP2Location LITE DB1 CSV file")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup = subparsers.add_parser("lookup", help="Look up the country of each address")
    lookup.add_argument("addresses", nargs="+", metavar="ADDRESS", help="IPv4 address")

    subparsers.add_parser("summary", help="Print the number of entries per country")

    return parser


def _lookup(provider: Provider, addresses: List[str]) -> int:
    status = EXIT_OK
    for text in addresses:
        try:
            address = parse_ipv4(text)
        except AddressError as e:
            print(f"{text}\tinvalid address")
            logger.debug(str(e))
            status = EXIT_FAILURE
            continue

        country = provider.get_ipv4_country(address)
        if country is None:
            print(f"{text}\tnot found")
            status = EXIT_FAILURE
        else:
            print(f"{text}\t{country}")
    return status


def _summary(provider: Provider) -> int:
    df = provider.summary()
    print(f"backend: {provider.kind}")
    print(f"countries: {len(df)}")
    print(f"entries: {int(df['entries'].sum())}")
    if not df.empty:
        print(df.to_string(index=False))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = resolve_config(
            repo_path=args.repo_path,
            db_path=args.db_path,
            log_level=args.log_level,
            config_file=args.config,
        )
    except (ConfigurationError, FileNotFoundError) as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    configure_logging(config.log_level)

    try:
        provider = load_provider(config)
    except (IpgeoError, FileNotFoundError) as e:
        logger.error(f"Failed to load {config.repo_path or config.db_path}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.command == "lookup":
        return _lookup(provider, args.addresses)
    return _summary(provider)


if __name__ == "__main__":
    sys.exit(main())
