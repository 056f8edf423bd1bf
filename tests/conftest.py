"""Shared test fixtures for ipgeo tests."""

from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pytest


def _write_repo(root: Path, files: Dict[str, Iterable[str]]) -> Path:
    ipv4 = root / "ipv4"
    ipv4.mkdir(parents=True, exist_ok=True)
    for name, lines in files.items():
        (ipv4 / name).write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    return root


def _write_db(path: Path, rows: List[Tuple]) -> Path:
    text = "".join(",".join(f'"{field}"' for field in row) + "\n" for row in rows)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def make_repo(tmp_path):
    """Factory writing a country-ip-blocks style repo: <root>/ipv4/<name> per entry.

    Example:
        def test_lookup(make_repo):
            repo = make_repo({"us.cidr": ["203.0.113.0/24"]})
    """
    def make(files: Dict[str, Iterable[str]], name: str = "repo") -> Path:
        return _write_repo(tmp_path / name, files)
    return make


@pytest.fixture
def make_db(tmp_path):
    """Factory writing an IP2Location style CSV with every field quoted.

    Example:
        def test_lookup(make_db):
            db = make_db([(100, 200, "US")])
    """
    def make(rows: List[Tuple], name: str = "db.csv") -> Path:
        return _write_db(tmp_path / name, rows)
    return make


@pytest.fixture
def block_repo(make_repo):
    """Repository with US and CA block files plus an ignored README."""
    root = make_repo(
        {
            "us.cidr": ["203.0.113.0/24", "198.51.100.0/25"],
            "ca.cidr": ["192.0.2.0/24", "198.51.100.128/25"],
        },
        name="country-ip-blocks",
    )
    (root / "ipv4" / "README.md").write_text("not a block file\n", encoding="utf-8")
    return root


@pytest.fixture
def range_db(make_db):
    """CSV with US, CN and AU ranges, sentinel rows and an unassigned gap."""
    return make_db(
        [
            (0, 16777215, "-", "-"),
            (16777216, 16777471, "US", "United States of America"),
            (16777472, 16777727, "-", "-"),
            (16777728, 16778239, "cn", "China"),
            (16779264, 16781311, "AU", "Australia"),
        ],
        name="IP2LOCATION-LITE-DB1.CSV",
    )
