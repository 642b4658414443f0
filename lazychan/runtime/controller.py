"""Keyboard actions for the three-panel browser.

``NavigationController`` owns the action set: cursor moves, panel
forward/back with fetches, pagination, reload, link/media actions and the
help toggle. Every fetch runs before any state is committed, so a
``FetchError`` leaves focus, cursors and pagination exactly as they were.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from ..client import FetchError
from ..client.http import ChanClient
from ..formatting.markup import decode_html_or_raw, strip_tags
from ..input.key_registry import KeyComboBinding, KeyComboRegistry
from ..input.keybinds import Keybinds
from ..model import Board, Post, Thread
from .app_helpers import (
    copy_text_to_clipboard,
    expire_status_message,
    open_in_browser,
    set_status_message,
)
from .cursors import PaginationCursor, SelectionCursor
from .focus import Panel
from .state import AppState

logger = logging.getLogger(__name__)

QUICK_STEP = 5

# Always active next to the configured keys; configured keys win conflicts.
FIXED_ALIASES: dict[str, tuple[str, ...]] = {
    "up": ("UP",),
    "down": ("DOWN",),
    "left": ("LEFT", "BACKSPACE"),
    "right": ("RIGHT", "ENTER"),
}

T = TypeVar("T")


class NavigationController:
    """Apply keyboard actions to ``AppState`` using a fetch client."""

    def __init__(
        self,
        state: AppState,
        client: ChanClient,
        keybinds: Keybinds | None = None,
        *,
        copy_text: Callable[[str], bool] = copy_text_to_clipboard,
        open_url: Callable[[str], bool] = open_in_browser,
    ) -> None:
        self.state = state
        self.client = client
        self.keybinds = keybinds if keybinds is not None else Keybinds()
        self._copy_text = copy_text
        self._open_url = open_url
        self.registry = self._build_registry()

    def _build_registry(self) -> KeyComboRegistry:
        handlers: dict[str, Callable[[], bool]] = {
            "up": lambda: self.move(-1),
            "down": lambda: self.move(1),
            "left": self.go_back,
            "right": self.go_forward,
            "quick_up": lambda: self.move(-QUICK_STEP),
            "quick_down": lambda: self.move(QUICK_STEP),
            "quick_left": self.go_back,
            "quick_right": self.go_forward,
            "page_next": self.next_page,
            "page_previous": self.previous_page,
            "copy_thread": self.copy_link,
            "open_thread": self.open_link,
            "copy_media": self.copy_media_link,
            "open_media": self.open_media_link,
            "fullscreen": self.toggle_fullscreen,
            "reload": self.reload,
            "help": self.toggle_help,
            "quit": lambda: True,
        }
        registry = KeyComboRegistry()
        for name in Keybinds.action_names():
            registry.register_binding(
                KeyComboBinding((getattr(self.keybinds, name),), handlers[name])
            )
        for name, combos in FIXED_ALIASES.items():
            registry.register_binding(KeyComboBinding(combos, handlers[name]))
        return registry

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token and return ``True`` when the app should quit."""
        return bool(self.registry.dispatch(key))

    def on_tick(self, now: float | None = None) -> None:
        expire_status_message(self.state, time.monotonic() if now is None else now)

    def _fetch(self, what: str, fetch: Callable[[], T]) -> T | None:
        """Run ``fetch``; on failure log it, show a status message, return ``None``."""
        try:
            return fetch()
        except FetchError as exc:
            logger.error("failed to load %s: %s", what, exc)
            set_status_message(self.state, f"Failed to load {what}: {exc.reason}")
            return None

    def _status(self, message: str) -> None:
        set_status_message(self.state, message)

    # Loading

    def load_boards(self) -> bool:
        """Fetch the board list into a fresh cursor selecting the first board."""
        boards = self._fetch("boards", self.client.fetch_boards)
        if boards is None:
            return False
        self._replace_boards(boards)
        return True

    def _replace_boards(self, boards: list[Board]) -> None:
        self.state.boards = SelectionCursor(boards)
        self.state.boards.advance_by(1)
        self.state.board_start = 0
        self.state.dirty = True

    def _replace_threads(self, threads: list[Thread], *, select_first: bool) -> None:
        self.state.threads = SelectionCursor(threads)
        if select_first:
            self.state.threads.advance_by(1)
        self.state.thread_list_start = 0
        self.state.dirty = True

    def _replace_posts(self, posts: list[Post]) -> None:
        self.state.posts = SelectionCursor(posts)
        self.state.posts.advance_by(1)
        self.state.thread_start = 0
        self.state.dirty = True

    # Movement

    def move(self, steps: int) -> bool:
        """Advance the focused panel's selection by ``steps``."""
        cursor = self.state.cursor_for(self.state.focus.focused)
        if len(cursor) == 0:
            return False
        cursor.advance_by(steps)
        self.state.dirty = True
        return False

    def go_forward(self) -> bool:
        """Enter the selected board or thread, fetching its content first."""
        state = self.state
        focused = state.focus.focused
        if focused is Panel.BOARD_LIST:
            board = state.boards.selected_item()
            if board is None:
                return False
            pagination = PaginationCursor(board.pages)
            threads = self._fetch(
                f"/{board.board}/",
                lambda: self.client.fetch_threads(board.board, pagination.page),
            )
            if threads is None:
                return False
            state.focus.forward()
            state.current_board = board
            state.pagination = pagination
            state.board_description = strip_tags(decode_html_or_raw(board.meta_description)).strip()
            self._replace_threads(threads, select_first=True)
            logger.debug("entered board %s (%d threads)", board.board, len(threads))
            return False

        if focused is Panel.THREAD_LIST:
            board = state.current_board
            thread = state.threads.selected_item()
            if board is None or thread is None:
                return False
            op_id = thread.opening_post.no
            posts = self._fetch(
                f"thread {op_id}",
                lambda: self.client.fetch_thread(board.board, op_id),
            )
            if posts is None:
                return False
            state.focus.forward()
            state.current_thread = thread
            self._replace_posts(posts)
            logger.debug("opened thread %s/%s (%d posts)", board.board, op_id, len(posts))
        return False

    def go_back(self) -> bool:
        if self.state.focus.back() is not None:
            self.state.dirty = True
        return False

    def toggle_fullscreen(self) -> bool:
        self.state.focus.toggle_fullscreen()
        self.state.dirty = True
        return False

    # Pagination

    def next_page(self) -> bool:
        return self._change_page(PaginationCursor.next_page)

    def previous_page(self) -> bool:
        return self._change_page(PaginationCursor.prev_page)

    def _change_page(self, step: Callable[[PaginationCursor], int]) -> bool:
        state = self.state
        board = state.current_board
        current = state.pagination
        if state.focus.focused is not Panel.THREAD_LIST or board is None or current is None:
            return False
        candidate = PaginationCursor(current.page_count, current.page)
        page = step(candidate)
        threads = self._fetch(
            f"/{board.board}/ page {page}",
            lambda: self.client.fetch_threads(board.board, page),
        )
        if threads is None:
            return False
        state.pagination = candidate
        self._replace_threads(threads, select_first=False)
        return False

    def reload(self) -> bool:
        """Refetch the focused panel and select its first item; pages are kept."""
        state = self.state
        focused = state.focus.focused
        if focused is Panel.BOARD_LIST:
            self.load_boards()
        elif focused is Panel.THREAD_LIST:
            board = state.current_board
            if board is None or state.pagination is None:
                return False
            page = state.pagination.page
            threads = self._fetch(
                f"/{board.board}/ page {page}",
                lambda: self.client.fetch_threads(board.board, page),
            )
            if threads is not None:
                self._replace_threads(threads, select_first=True)
        else:
            board = state.current_board
            thread = state.current_thread
            if board is None or thread is None:
                return False
            op_id = thread.opening_post.no
            posts = self._fetch(
                f"thread {op_id}",
                lambda: self.client.fetch_thread(board.board, op_id),
            )
            if posts is not None:
                self._replace_posts(posts)
        return False

    # Links

    def selected_link(self) -> str | None:
        """Web URL of the focused panel's selected board, thread or post."""
        state = self.state
        provider = self.client.provider
        focused = state.focus.focused
        if focused is Panel.BOARD_LIST:
            board = state.boards.selected_item()
            return provider.content_url(board.board) if board is not None else None
        board = state.current_board
        if board is None:
            return None
        if focused is Panel.THREAD_LIST:
            thread = state.threads.selected_item()
            if thread is None:
                return None
            return provider.thread_url(board.board, thread.opening_post.no)
        post = state.posts.selected_item()
        if post is None or state.current_thread is None:
            return None
        return provider.post_url(board.board, state.current_thread.opening_post.no, post.no)

    def selected_media_link(self) -> str | None:
        """Media URL of the selected thread's opening post or the selected post."""
        state = self.state
        board = state.current_board
        focused = state.focus.focused
        if board is None or focused is Panel.BOARD_LIST:
            return None
        if focused is Panel.THREAD_LIST:
            thread = state.threads.selected_item()
            post = thread.opening_post if thread is not None else None
        else:
            post = state.posts.selected_item()
        if post is None or post.attachment is None:
            return None
        return self.client.provider.file_url(board.board, post.attachment.media_filename)

    def copy_link(self) -> bool:
        return self._copy(self.selected_link(), "Nothing selected")

    def open_link(self) -> bool:
        return self._open(self.selected_link(), "Nothing selected")

    def copy_media_link(self) -> bool:
        return self._copy(self.selected_media_link(), "No media on selection")

    def open_media_link(self) -> bool:
        return self._open(self.selected_media_link(), "No media on selection")

    def _copy(self, url: str | None, missing: str) -> bool:
        if url is None:
            self._status(missing)
        elif self._copy_text(url):
            self._status(f"Copied {url}")
        else:
            logger.warning("clipboard copy failed for %s", url)
            self._status("Clipboard unavailable")
        return False

    def _open(self, url: str | None, missing: str) -> bool:
        if url is None:
            self._status(missing)
        elif self._open_url(url):
            self._status(f"Opened {url}")
        else:
            logger.warning("browser open failed for %s", url)
            self._status("Could not open browser")
        return False

    def toggle_help(self) -> bool:
        self.state.show_help = not self.state.show_help
        self.state.dirty = True
        return False


__all__ = ["FIXED_ALIASES", "NavigationController", "QUICK_STEP"]
