"""Panel focus/visibility state machine and screen-share table.

Visibility of the board list, thread list and thread view is tracked
independently of which panel has focus. Screen shares come from a fixed
table keyed by the visibility triple; they are not derived arithmetically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Panel(Enum):
    BOARD_LIST = "board_list"
    THREAD_LIST = "thread_list"
    THREAD = "thread"


class LayoutMode(Enum):
    """Named visibility combinations."""

    BOARDS_ONLY = "boards_only"
    BOARDS_AND_THREADS = "boards_and_threads"
    BOARDS_THREADS_AND_POST = "boards_threads_and_post"
    THREADS_AND_POST = "threads_and_post"
    POST_ONLY = "post_only"
    THREADS_ONLY = "threads_only"
    ALL_HIDDEN = "all_hidden"


@dataclass(frozen=True)
class ScreenShare:
    """Column percentages for board list, thread list and thread view."""

    board_list: int
    thread_list: int
    thread: int


FALLBACK_SCREEN_SHARE = ScreenShare(100, 0, 0)

# The all-visible row overlaps past 100%; the thread column only gets what
# the first two columns leave over.
SCREEN_SHARES: dict[tuple[bool, bool, bool], ScreenShare] = {
    (True, False, False): ScreenShare(100, 0, 0),
    (True, True, False): ScreenShare(12, 88, 0),
    (True, True, True): ScreenShare(12, 88, 50),
    (False, True, True): ScreenShare(12, 34, 54),
    (False, False, True): ScreenShare(0, 0, 100),
    (False, True, False): ScreenShare(0, 100, 0),
}

_LAYOUT_MODES: dict[tuple[bool, bool, bool], LayoutMode] = {
    (True, False, False): LayoutMode.BOARDS_ONLY,
    (True, True, False): LayoutMode.BOARDS_AND_THREADS,
    (True, True, True): LayoutMode.BOARDS_THREADS_AND_POST,
    (False, True, True): LayoutMode.THREADS_AND_POST,
    (False, False, True): LayoutMode.POST_ONLY,
    (False, True, False): LayoutMode.THREADS_ONLY,
}


def calc_screen_share(board_list: bool, thread_list: bool, thread: bool) -> ScreenShare:
    """Return the screen share for a visibility triple (fallback 100/0/0)."""
    return SCREEN_SHARES.get((board_list, thread_list, thread), FALLBACK_SCREEN_SHARE)


@dataclass
class FocusState:
    """Which panels are shown and which one receives directional input."""

    focused: Panel = Panel.BOARD_LIST
    board_list_visible: bool = True
    thread_list_visible: bool = False
    thread_visible: bool = False

    @property
    def visibility(self) -> tuple[bool, bool, bool]:
        return (self.board_list_visible, self.thread_list_visible, self.thread_visible)

    @property
    def layout_mode(self) -> LayoutMode:
        return _LAYOUT_MODES.get(self.visibility, LayoutMode.ALL_HIDDEN)

    def screen_share(self) -> ScreenShare:
        return calc_screen_share(*self.visibility)

    def is_visible(self, panel: Panel) -> bool:
        if panel is Panel.BOARD_LIST:
            return self.board_list_visible
        if panel is Panel.THREAD_LIST:
            return self.thread_list_visible
        return self.thread_visible

    def forward(self) -> Panel | None:
        """Enter the next panel and return it, or ``None`` at the thread view.

        Callers fetch the entered panel's content before committing, so this
        is applied only once that fetch succeeded.
        """
        if self.focused is Panel.BOARD_LIST:
            self.thread_list_visible = True
            self.focused = Panel.THREAD_LIST
            return Panel.THREAD_LIST
        if self.focused is Panel.THREAD_LIST:
            self.thread_visible = True
            self.board_list_visible = False
            self.focused = Panel.THREAD
            return Panel.THREAD
        return None

    def back(self) -> Panel | None:
        """Return to the previous panel and return it, or ``None`` at the board list."""
        if self.focused is Panel.THREAD_LIST:
            self.board_list_visible = True
            self.thread_visible = False
            self.focused = Panel.BOARD_LIST
            return Panel.BOARD_LIST
        if self.focused is Panel.THREAD:
            self.board_list_visible = True
            self.thread_list_visible = True
            self.thread_visible = False
            self.focused = Panel.THREAD_LIST
            return Panel.THREAD_LIST
        return None

    def toggle_fullscreen(self) -> None:
        """Hide the panel beside the focused one, shifting focus if needed."""
        if self.focused is Panel.BOARD_LIST:
            self.board_list_visible = False
            self.focused = Panel.THREAD_LIST
        elif self.focused is Panel.THREAD_LIST:
            if self.thread_visible:
                self.thread_list_visible = False
                self.focused = Panel.THREAD
            else:
                self.board_list_visible = False
        else:
            self.thread_list_visible = False


__all__ = [
    "FALLBACK_SCREEN_SHARE",
    "FocusState",
    "LayoutMode",
    "Panel",
    "SCREEN_SHARES",
    "ScreenShare",
    "calc_screen_share",
]
