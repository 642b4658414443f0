"""Post display assembly for thread-list previews and opened threads.

A rendered post is a list of styled lines: a blank spacer, the header
(subject, author, timestamp, id, counter, sticky/closed glyphs), an optional
attachment line, the wrapped body and, in short mode, a reply-count footer.
Styling is expressed as semantic span roles; ``ui_theme`` maps them to ANSI.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from ..model import Post
from .lines import LineType
from .markup import decode_html_or_raw
from .wrap import TRUNCATION_MARKER, wrap_post_body

SUB_LINE_WIDTH = 110
SHORT_LINE_LIMIT = 10
FULL_LINE_LIMIT = 60
STICKY_GLYPH = "📌"
CLOSED_GLYPH = "🔓"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class DisplayMode(Enum):
    SHORT = "short"
    FULL = "full"


class SpanRole(Enum):
    """Semantic style slot of one span of text."""

    TEXT = "text"
    SUBJECT = "subject"
    HEADER = "header"
    COUNTER = "counter"
    GLYPH = "glyph"
    ATTACHMENT = "attachment"
    QUOTE = "quote"
    REPLY = "reply"
    CUT_MARKER = "cut_marker"
    REPLIES = "replies"
    BOARD_ID = "board_id"


@dataclass(frozen=True)
class Span:
    text: str
    role: SpanRole = SpanRole.TEXT


StyledLine = tuple[Span, ...]

_BODY_ROLES: dict[LineType, SpanRole] = {
    LineType.PLAIN: SpanRole.TEXT,
    LineType.QUOTE: SpanRole.QUOTE,
    LineType.REPLY: SpanRole.REPLY,
}


@dataclass(frozen=True)
class RenderedPost:
    """Styled display lines for one post."""

    lines: tuple[StyledLine, ...]

    def __len__(self) -> int:
        return len(self.lines)

    def plain_lines(self) -> list[str]:
        """Return lines with styling dropped, mainly for tests and dumps."""
        return ["".join(span.text for span in line) for line in self.lines]


def format_default(text: str) -> str:
    """Indent ``text`` by one cell, the standard left gutter of panel rows."""
    return f" {text}"


def format_time(timestamp: int) -> str:
    """Format epoch seconds as ``MM/DD/YY(Day)HH:MM:SS`` in UTC."""
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return f"{moment:%m/%d/%y}({_WEEKDAYS[moment.weekday()]}){moment:%H:%M:%S}"


def _header_line(post: Post, counter: str) -> StyledLine:
    spans: list[Span] = []
    if post.sub:
        spans.append(Span(format_default(decode_html_or_raw(post.sub)), SpanRole.SUBJECT))
    spans.append(Span(" "))
    spans.append(
        Span(
            f"{decode_html_or_raw(post.name)} {format_time(post.time)} No.{post.no}",
            SpanRole.HEADER,
        )
    )
    spans.append(Span(format_default(counter), SpanRole.COUNTER))
    if post.sticky:
        spans.append(Span(format_default(STICKY_GLYPH), SpanRole.GLYPH))
    if post.closed:
        spans.append(Span(format_default(CLOSED_GLYPH), SpanRole.GLYPH))
    return tuple(spans)


def render_post(
    post: Post,
    display_index: int,
    display_mode: DisplayMode,
    *,
    total_count: int | None = None,
    sub_line_width: int = SUB_LINE_WIDTH,
) -> RenderedPost:
    """Build the display lines for ``post``.

    ``display_index`` is 1-based. Short mode shows an ``index/total`` counter
    and a reply-count footer; full mode shows ``#index`` and a longer body.
    """
    if display_mode is DisplayMode.SHORT:
        total = display_index if total_count is None else total_count
        counter = f"{display_index}/{total}"
        line_limit = SHORT_LINE_LIMIT
    else:
        counter = f"#{display_index}"
        line_limit = FULL_LINE_LIMIT

    lines: list[StyledLine] = [()]
    lines.append(_header_line(post, counter))

    if post.attachment is not None:
        lines.append((Span(format_default(post.attachment.display_name), SpanRole.ATTACHMENT),))

    for wrapped in wrap_post_body(post.com, sub_line_width, line_limit):
        body = Span(format_default(wrapped.content), _BODY_ROLES[wrapped.line_type])
        if wrapped.truncated:
            lines.append((body, Span(TRUNCATION_MARKER, SpanRole.CUT_MARKER)))
        else:
            lines.append((body,))

    if display_mode is DisplayMode.SHORT:
        lines.append((Span(format_default(f"{post.replies} Replies"), SpanRole.REPLIES),))

    lines.append(())
    return RenderedPost(lines=tuple(lines))


__all__ = [
    "CLOSED_GLYPH",
    "DisplayMode",
    "FULL_LINE_LIMIT",
    "RenderedPost",
    "SHORT_LINE_LIMIT",
    "STICKY_GLYPH",
    "SUB_LINE_WIDTH",
    "Span",
    "SpanRole",
    "StyledLine",
    "format_default",
    "format_time",
    "render_post",
]
