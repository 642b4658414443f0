"""Width-bounded wrapping of post bodies with a total line budget.

Widths are counted in codepoints. Once the running sub-line count reaches the
budget, the current sub-line is cut short and suffixed with a truncation
marker so the combined text still fits the sub-line width.
"""

from __future__ import annotations

from dataclasses import dataclass

from .lines import LineType, classify_line
from .markup import decode_html_or_raw, split_logical_lines, strip_tags

TRUNCATION_MARKER = "[...]"
TRUNCATION_MARKER_WIDTH = len(TRUNCATION_MARKER)


@dataclass(frozen=True)
class WrappedLine:
    """One display sub-line of a post body."""

    line_type: LineType
    content: str
    truncated: bool = False

    @property
    def display_text(self) -> str:
        """Return content with the truncation marker appended when cut."""
        if self.truncated:
            return f"{self.content}{TRUNCATION_MARKER}"
        return self.content


def split_sub_lines(line: str, width: int) -> list[str]:
    """Split one logical line into chunks of at most ``width`` codepoints.

    An empty line yields a single empty chunk.
    """
    if not line:
        return [""]
    return [line[pos : pos + width] for pos in range(0, len(line), width)]


def truncated_content(chunk: str, width: int) -> str:
    """Return the part of ``chunk`` that fits next to the truncation marker."""
    keep = max(0, width - TRUNCATION_MARKER_WIDTH)
    return chunk[: min(len(chunk), keep)]


def wrap_post_body(raw_markup: str, sub_line_width: int, max_lines: int) -> list[WrappedLine]:
    """Decode ``raw_markup`` and wrap it into at most ``max_lines`` sub-lines.

    Logical lines are delimited by ``<br>`` and classified once; all of their
    sub-lines share that classification. The sub-line that brings the running
    count to ``max_lines`` is emitted truncated (marker appended) and every
    remaining sub-line is discarded.
    """
    if sub_line_width <= 0:
        raise ValueError("sub_line_width must be >= 1")
    if max_lines <= 0:
        return []

    text = decode_html_or_raw(raw_markup)
    wrapped: list[WrappedLine] = []
    for logical_line in split_logical_lines(text):
        line = strip_tags(logical_line)
        line_type = classify_line(line)
        for chunk in split_sub_lines(line, sub_line_width):
            if len(wrapped) + 1 >= max_lines:
                wrapped.append(
                    WrappedLine(
                        line_type,
                        truncated_content(chunk, sub_line_width),
                        truncated=True,
                    )
                )
                return wrapped
            wrapped.append(WrappedLine(line_type, chunk))
    return wrapped


__all__ = [
    "TRUNCATION_MARKER",
    "TRUNCATION_MARKER_WIDTH",
    "WrappedLine",
    "split_sub_lines",
    "truncated_content",
    "wrap_post_body",
]
