"""Single owned session state threaded through the event loop."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..model import Board, Post, Thread
from .cursors import PaginationCursor, SelectionCursor
from .focus import FocusState, Panel


@dataclass
class AppState:
    focus: FocusState = field(default_factory=FocusState)
    boards: SelectionCursor[Board] = field(default_factory=SelectionCursor)
    threads: SelectionCursor[Thread] = field(default_factory=SelectionCursor)
    posts: SelectionCursor[Post] = field(default_factory=SelectionCursor)
    pagination: PaginationCursor | None = None
    current_board: Board | None = None
    current_thread: Thread | None = None
    board_description: str = ""
    board_start: int = 0
    thread_list_start: int = 0
    thread_start: int = 0
    show_help: bool = False
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True

    def cursor_for(self, panel: Panel) -> SelectionCursor:
        if panel is Panel.BOARD_LIST:
            return self.boards
        if panel is Panel.THREAD_LIST:
            return self.threads
        return self.posts

    def scroll_start(self, panel: Panel) -> int:
        if panel is Panel.BOARD_LIST:
            return self.board_start
        if panel is Panel.THREAD_LIST:
            return self.thread_list_start
        return self.thread_start

    def set_scroll_start(self, panel: Panel, start: int) -> None:
        if panel is Panel.BOARD_LIST:
            self.board_start = start
        elif panel is Panel.THREAD_LIST:
            self.thread_list_start = start
        else:
            self.thread_start = start


__all__ = ["AppState"]
