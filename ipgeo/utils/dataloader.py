"""Shared data loading utilities for the block and range stores.

This module locates input files and reads newline-delimited text with
line numbers, so that parse errors can point at the offending line.
"""

from pathlib import Path
from typing import Iterator, List, Tuple, Union

from ipgeo.utils.errors import ParseError


def format_not_found_error(
    what: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        what: Name of the missing data (e.g., 'country-ip-blocks ipv4')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {what} data found.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


def require_file(path: Union[str, Path], what: str, fix_instructions: List[str]) -> Path:
    """Return path as a Path, raising FileNotFoundError if it is not a file."""
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(
            format_not_found_error(what, [("File", path)], fix_instructions)
        )
    return path


def require_dir(path: Union[str, Path], what: str, fix_instructions: List[str]) -> Path:
    """Return path as a Path, raising FileNotFoundError if it is not a directory."""
    path = Path(path).expanduser()
    if not path.is_dir():
        raise FileNotFoundError(
            format_not_found_error(what, [("Directory", path)], fix_instructions)
        )
    return path


def iter_lines(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield (line_number, line) pairs with line endings stripped.

    Line numbers start at 1. A trailing newline at end of file does not
    produce an extra empty line.

    Raises:
        ParseError: If a line is not valid UTF-8
    """
    with open(path, "rb") as f:
        for lineno, raw in enumerate(f, 1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"{path}:{lineno}: invalid UTF-8") from e
            yield lineno, line.rstrip("\r\n")


__all__ = [
    "format_not_found_error",
    "require_file",
    "require_dir",
    "iter_lines",
]
