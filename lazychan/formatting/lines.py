"""Logical-line classification for post bodies.

A line starting with ``>>`` links to another post, a single leading ``>``
marks quoted text ("greentext"), anything else is plain text.
"""

from __future__ import annotations

from enum import Enum


class LineType(Enum):
    """Display class shared by every sub-line of one logical line."""

    PLAIN = "plain"
    QUOTE = "quote"
    REPLY = "reply"


def classify_line(line: str) -> LineType:
    """Classify ``line`` by its first two characters."""
    first = line[:1]
    second = line[1:2]
    if first == ">" and second == ">":
        return LineType.REPLY
    if first == ">":
        return LineType.QUOTE
    return LineType.PLAIN


__all__ = ["LineType", "classify_line"]
