"""Frame composition for the three-panel browser.

Builds fully composed ANSI frames (panel columns, optional help bar and a
status line) from ``AppState`` without mutating it. Scroll positions the
frame needed are returned alongside the rows for the loop to store.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from functools import lru_cache

from ..ansi import fit_ansi_line
from ..formatting.markup import decode_html_or_raw
from ..formatting.post import (
    SUB_LINE_WIDTH,
    DisplayMode,
    RenderedPost,
    Span,
    SpanRole,
    StyledLine,
    format_default,
    render_post,
)
from ..input.keybinds import Keybinds, display_key
from ..model import Board, Post
from ..runtime.focus import Panel, ScreenShare
from ..runtime.state import AppState
from ..ui_theme import UITheme, styled_line_to_ansi
from .help import HELP_ROWS, help_panel_lines

PANEL_ORDER: tuple[Panel, ...] = (Panel.BOARD_LIST, Panel.THREAD_LIST, Panel.THREAD)
DIVIDER = "│"


@dataclass(frozen=True)
class Frame:
    lines: list[str]
    starts: dict[Panel, int]


def column_widths(share: ScreenShare, total: int) -> tuple[int, int, int]:
    """Split ``total`` columns by a screen share.

    Later columns only get what earlier ones leave over, and the rounding
    leftover goes to the rightmost non-empty column.
    """
    total = max(0, total)
    board = min(total, total * share.board_list // 100)
    remaining = total - board
    thread_list = min(remaining, total * share.thread_list // 100)
    remaining -= thread_list
    thread = min(remaining, total * share.thread // 100)
    remaining -= thread
    widths = [board, thread_list, thread]
    if remaining > 0:
        nonzero = [idx for idx, value in enumerate(widths) if value > 0]
        widths[nonzero[-1] if nonzero else 0] += remaining
    return widths[0], widths[1], widths[2]


def visible_item_start(heights: list[int], selected: int | None, start: int, rows: int) -> int:
    """Return the first item to draw so the selected item's top is on screen."""
    if not heights:
        return 0
    start = max(0, min(start, len(heights) - 1))
    if selected is None:
        return start
    if selected < start:
        return selected
    while start < selected and sum(heights[start : selected + 1]) > rows:
        start += 1
    return start


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    return theme.reverse + text.replace(theme.reset, theme.reset + theme.reverse) + theme.reset


def body_width(panel_width: int) -> int:
    """Wrap width for post bodies in a panel of ``panel_width`` columns."""
    return max(1, min(SUB_LINE_WIDTH, panel_width - 2))


@lru_cache(maxsize=1024)
def _cached_post(
    post: Post,
    display_index: int,
    display_mode: DisplayMode,
    total_count: int | None,
    sub_line_width: int,
) -> RenderedPost:
    return render_post(
        post,
        display_index,
        display_mode,
        total_count=total_count,
        sub_line_width=sub_line_width,
    )


def board_line(board: Board) -> StyledLine:
    return (
        Span(format_default(f"/{board.board}/"), SpanRole.BOARD_ID),
        Span(format_default(decode_html_or_raw(board.title))),
    )


def panel_title(panel: Panel, state: AppState) -> str:
    if panel is Panel.BOARD_LIST:
        return "Boards"
    if panel is Panel.THREAD_LIST:
        page = state.pagination.page if state.pagination is not None else 1
        title = f"Threads, page {page}"
        if state.board_description:
            title += f" {state.board_description}"
        return title
    return "Thread"


def panel_items(panel: Panel, state: AppState, width: int) -> list[list[StyledLine]]:
    """Styled lines of every item in ``panel``'s list."""
    if panel is Panel.BOARD_LIST:
        return [[board_line(board)] for board in state.boards.items]
    wrap_width = body_width(width)
    if panel is Panel.THREAD_LIST:
        total = len(state.threads)
        return [
            list(_cached_post(thread.opening_post, idx, DisplayMode.SHORT, total, wrap_width).lines)
            for idx, thread in enumerate(state.threads.items, start=1)
        ]
    return [
        list(_cached_post(post, idx, DisplayMode.FULL, None, wrap_width).lines)
        for idx, post in enumerate(state.posts.items, start=1)
    ]


def _highlight_item(lines: list[str], theme: UITheme) -> list[str]:
    """Highlight the first non-empty line (post header or board row)."""
    out = list(lines)
    for idx, line in enumerate(out):
        if line:
            out[idx] = selected_with_ansi(line, theme)
            break
    return out


def panel_rows(
    panel: Panel,
    state: AppState,
    width: int,
    rows: int,
    theme: UITheme,
) -> tuple[list[str], int]:
    """Return ``rows`` fitted rows for one panel plus its scroll start."""
    focused = state.focus.focused is panel
    title_style = theme.title_focused if focused else theme.title
    out = [fit_ansi_line(f"{title_style}{format_default(panel_title(panel, state))}{theme.reset}", width, theme.reset)]

    cursor = state.cursor_for(panel)
    items = [
        [styled_line_to_ansi(line, theme) for line in item]
        for item in panel_items(panel, state, width)
    ]
    item_rows = max(0, rows - 1)
    start = visible_item_start(
        [len(item) for item in items],
        cursor.selected,
        state.scroll_start(panel),
        item_rows,
    )
    body: list[str] = []
    for idx in range(start, len(items)):
        lines = items[idx]
        if idx == cursor.selected:
            lines = _highlight_item(lines, theme)
        body.extend(lines)
        if len(body) >= item_rows:
            break
    body = body[:item_rows]
    body.extend([""] * (item_rows - len(body)))
    out.extend(fit_ansi_line(line, width, theme.reset) for line in body)
    return out[:rows], start


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_text(state: AppState) -> str:
    """Status message when one is active, otherwise a location breadcrumb."""
    if state.status_message:
        return state.status_message
    focused = state.focus.focused
    board = state.current_board
    if focused is Panel.BOARD_LIST or board is None:
        return f"{len(state.boards)} boards"
    pagination = state.pagination
    crumb = f"/{board.board}/"
    if pagination is not None:
        crumb += f" page {pagination.page}/{pagination.page_count}"
    if focused is Panel.THREAD and state.current_thread is not None:
        crumb += f" > No.{state.current_thread.opening_post.no} ({len(state.posts)} posts)"
    return crumb


def build_frame(
    state: AppState,
    keybinds: Keybinds,
    theme: UITheme,
    width: int,
    height: int,
) -> Frame:
    """Compose one frame of ``height`` rows and ``width`` columns."""
    width = max(1, width)
    height = max(2, height)
    help_rows = min(HELP_ROWS, height - 2) if state.show_help else 0
    content_rows = height - 1 - help_rows

    shown = [
        (panel, col_width)
        for panel, col_width in zip(PANEL_ORDER, column_widths(state.focus.screen_share(), width))
        if col_width > 0
    ]
    columns: list[list[str]] = []
    starts: dict[Panel, int] = {}
    for position, (panel, col_width) in enumerate(shown):
        last = position == len(shown) - 1
        inner = col_width if last else max(0, col_width - 1)
        rows, start = panel_rows(panel, state, inner, content_rows, theme)
        starts[panel] = start
        if not last:
            rows = [f"{row}{theme.divider}{DIVIDER}{theme.reset}" for row in rows]
        columns.append(rows)

    lines = ["".join(column[row] for column in columns) for row in range(content_rows)]
    if help_rows:
        lines.extend(
            fit_ansi_line(line, width, theme.reset)
            for line in help_panel_lines(keybinds, theme)[:help_rows]
        )
    status = build_status_line(status_text(state), width, f"│ {display_key(keybinds.help)} Help")
    if state.status_message and theme.status:
        lines.append(f"{theme.reverse}{theme.status}{status}{theme.reset}")
    else:
        lines.append(f"{theme.reverse}{status}{theme.reset}")
    return Frame(lines=lines, starts=starts)


def render_frame(frame: Frame, fd: int | None = None) -> None:
    """Write a composed frame to the terminal in a single ``os.write``."""
    out = ["\033[H\033[J", "\r\n".join(frame.lines)]
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, "".join(out).encode("utf-8", errors="replace"))


def render_posts_text(posts: list[Post], display_mode: DisplayMode, width: int, theme: UITheme) -> str:
    """Render posts as plain newline-separated text for one-shot output."""
    wrap_width = body_width(width)
    total = len(posts) if display_mode is DisplayMode.SHORT else None
    out: list[str] = []
    for idx, post in enumerate(posts, start=1):
        rendered = render_post(post, idx, display_mode, total_count=total, sub_line_width=wrap_width)
        for line in rendered.lines:
            out.append(styled_line_to_ansi(line, theme))
    return "\n".join(out) + "\n"


__all__ = [
    "DIVIDER",
    "Frame",
    "HELP_ROWS",
    "board_line",
    "body_width",
    "build_frame",
    "build_status_line",
    "column_widths",
    "panel_rows",
    "panel_title",
    "render_frame",
    "render_posts_text",
    "selected_with_ansi",
    "status_text",
    "visible_item_start",
]
