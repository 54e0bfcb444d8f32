"""Config block extraction from running-config text.

A block is a header line plus its indented children, closed by the first
line that is exactly ``!``::

    interface Ethernet1
       description uplink
       no shutdown
    !

Nested sub-blocks are not tracked: the first bare ``!`` after the header
always ends the block.
"""
import re
from dataclasses import dataclass
from typing import Optional

TERMINATOR = re.compile(r"^!$", re.M)


@dataclass(frozen=True)
class Span:
    """Character offsets of a block inside the config text (end exclusive)."""
    start: int
    end: int


def literal(header: str) -> str:
    """Return a pattern matching ``header`` verbatim."""
    return re.escape(header)


def find_block(config: str, pattern: str) -> Optional[Span]:
    """Locate the block whose header line fully matches ``pattern``.

    Returns None when no header line matches or when the header is never
    closed by a ``!`` line.
    """
    header = re.compile(f"^{pattern}$", re.M).search(config)
    if header is None:
        return None

    terminator = TERMINATOR.search(config, header.end())
    if terminator is None:
        return None

    return Span(header.start(), terminator.end())


def extract_block(config: str, pattern: str) -> Optional[str]:
    """Return the text of the block matching ``pattern``, or None."""
    span = find_block(config, pattern)
    if span is None:
        return None
    return config[span.start:span.end]


def child_lines(block: str) -> list[str]:
    """Stripped child lines of a block (header and terminator dropped)."""
    lines = block.splitlines()[1:]
    return [line.strip() for line in lines if line.strip() and line.strip() != "!"]
