"""Text layout for post content: decoding, classification, wrapping, assembly."""

from __future__ import annotations

from .lines import LineType, classify_line
from .markup import DecodeError, decode_html, decode_html_or_raw
from .post import DisplayMode, RenderedPost, Span, SpanRole, StyledLine, format_time, render_post
from .wrap import TRUNCATION_MARKER, WrappedLine, wrap_post_body

__all__ = [
    "DecodeError",
    "DisplayMode",
    "LineType",
    "RenderedPost",
    "Span",
    "SpanRole",
    "StyledLine",
    "TRUNCATION_MARKER",
    "WrappedLine",
    "classify_line",
    "decode_html",
    "decode_html_or_raw",
    "format_time",
    "render_post",
    "wrap_post_body",
]
