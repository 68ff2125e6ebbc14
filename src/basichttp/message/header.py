"""Header value object and raw header block parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_LINE_SEPARATOR = re.compile(r"\r\n")


@dataclass(frozen=True)
class Header:
    """
    A single header line.

    Attributes:
        name: Header name exactly as sent or received
        values: Ordered value segments, split on commas without trimming
    """

    name: str
    values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Lists are accepted and frozen into a tuple
        object.__setattr__(self, "values", tuple(self.values))

    def values_as_string(self) -> str:
        """Join the value segments the way they go on the wire."""
        return ", ".join(self.values)

    def has_name(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()


def parse_header_block(raw: Optional[str]) -> tuple[Optional[str], list[Header]]:
    """
    Parse a CRLF-separated header block into a status line and headers.

    Lines containing a colon become Header entries in block order; the
    name is everything before the first colon. Whitespace right after the
    colon separates name from value and is dropped, the value itself is
    split on commas verbatim. A line without a colon is taken as the
    status line, the last such line wins. Empty lines are discarded.

    Args:
        raw: Raw header block, e.g. "GET / HTTP/1.1\\r\\nHost: example.com\\r\\n"

    Returns:
        Tuple of (status line or None, list of Header)

    Example:
        >>> parse_header_block("GET / HTTP/1.1\\r\\nX-Test: a,b\\r\\n")
        ('GET / HTTP/1.1', [Header(name='X-Test', values=('a', 'b'))])
    """
    status: Optional[str] = None
    headers: list[Header] = []

    if not raw:
        return status, headers

    for line in _LINE_SEPARATOR.split(raw):
        if not line:
            continue
        name, colon, value = line.partition(":")
        if colon:
            headers.append(Header(name, value.lstrip(" \t").split(",")))
        else:
            status = line

    return status, headers
