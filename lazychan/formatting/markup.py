"""Markup decoding helpers for user-submitted post text.

Post bodies arrive as HTML fragments: entity-escaped text, ``<br>`` line
breaks and inline tags (quote links, spans, ``<wbr>``). Decoding is strict so
that malformed escapes are detectable; render paths use the lenient wrapper.
"""

from __future__ import annotations

import re
from html.entities import html5

LINE_BREAK = "<br>"
TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
_MAX_CODEPOINT = 0x10FFFF


class DecodeError(ValueError):
    """Raised when text contains a malformed or unknown entity escape."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.position = position


def _decode_entity(body: str, position: int) -> str:
    if body.startswith("#"):
        digits = body[1:]
        try:
            if digits[:1] in {"x", "X"}:
                codepoint = int(digits[1:], 16)
            else:
                codepoint = int(digits, 10)
        except ValueError as exc:
            raise DecodeError(f"invalid numeric entity &{body};", position) from exc
        if codepoint <= 0 or codepoint > _MAX_CODEPOINT or 0xD800 <= codepoint <= 0xDFFF:
            raise DecodeError(f"numeric entity &{body}; out of range", position)
        return chr(codepoint)
    replacement = html5.get(f"{body};")
    if replacement is None:
        raise DecodeError(f"unknown entity &{body};", position)
    return replacement


def decode_html(text: str) -> str:
    """Decode HTML entity escapes in ``text``.

    Every ``&`` must start a complete ``&name;``, ``&#NNN;`` or ``&#xHH;``
    escape naming a known entity or a valid codepoint; anything else raises
    :class:`DecodeError`.
    """
    out: list[str] = []
    pos = 0
    while True:
        amp = text.find("&", pos)
        if amp < 0:
            out.append(text[pos:])
            break
        out.append(text[pos:amp])
        match = _ENTITY_RE.match(text, amp)
        if match is None:
            raise DecodeError("malformed entity escape", amp)
        out.append(_decode_entity(match.group(1), amp))
        pos = match.end()
    return "".join(out)


def decode_html_or_raw(text: str) -> str:
    """Decode ``text``, falling back to the raw string on :class:`DecodeError`."""
    try:
        return decode_html(text)
    except DecodeError:
        return text


def strip_tags(line: str) -> str:
    """Remove ``<...>`` spans, keeping the text between them."""
    return TAG_RE.sub("", line)


def split_logical_lines(text: str) -> list[str]:
    """Split decoded text on ``<br>``, preserving empty lines."""
    return text.split(LINE_BREAK)


__all__ = [
    "DecodeError",
    "LINE_BREAK",
    "decode_html",
    "decode_html_or_raw",
    "split_logical_lines",
    "strip_tags",
]
