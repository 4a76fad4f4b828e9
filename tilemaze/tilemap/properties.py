"""Reading and writing the key=value property blocks of map files.

The syntax is a small subset of the usual `.properties` text format:
- blank lines are ignored
- lines starting with '#' or '!' are comments
- the key ends at the first '=' or ':'; key and value are stripped

So keys cannot start with a comment character or hold a separator, and
neither keys nor values can hold line breaks or surrounding whitespace.
`check_property` rejects such pairs before they reach a grid.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class PropertyLineError:
    """A property line that could not be split into key and value."""

    line_index: int
    text: str


def parse_properties(
    lines: Iterable[str],
) -> tuple[dict[str, str], list[PropertyLineError]]:
    """Parse property lines into an ordered dict.

    Later definitions of a key replace earlier ones.

    Returns:
        (properties, errors) where errors lists lines without a separator.
    """
    properties: dict[str, str] = {}
    errors: list[PropertyLineError] = []
    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        sep = min((i for i in (line.find("="), line.find(":")) if i >= 0), default=-1)
        if sep <= 0:
            errors.append(PropertyLineError(index, raw))
            continue
        properties[line[:sep].strip()] = line[sep + 1 :].strip()
    return properties, errors


def format_properties(properties: Mapping[str, str]) -> list[str]:
    """Format properties as "key=value" lines sorted by key."""
    return [f"{key}={properties[key]}" for key in sorted(properties)]


def check_property(key: str, value: str) -> None:
    """Raise ValueError for a pair that would not survive format then parse."""
    if not key or key[0] in "#!" or key != key.strip() or any(c in key for c in "=:\n\r"):
        raise ValueError(f"Invalid property key: {key!r}")
    if value != value.strip() or any(c in value for c in "\n\r"):
        raise ValueError(f"Invalid value for property {key!r}: {value!r}")
