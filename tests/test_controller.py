"""Navigation controller behavior against a scripted fetch client.

Verifies fetch-then-commit transitions, pagination, reload policy, link
actions and that fetch failures leave the session state untouched.
"""

from __future__ import annotations

import unittest

from lazychan.client import FetchError, FourChanProvider
from lazychan.input.keybinds import Keybinds
from lazychan.model import Attachment, Board, Post, Thread
from lazychan.runtime.controller import NavigationController
from lazychan.runtime.focus import Panel
from lazychan.runtime.state import AppState


def _thread(op_no: int, with_media: bool = False) -> Thread:
    attachment = Attachment("pic", ".png", 1000 + op_no) if with_media else None
    return Thread(posts=(Post(no=op_no, com=f"op {op_no}", attachment=attachment),))


class FakeClient:
    def __init__(self) -> None:
        self.provider = FourChanProvider()
        self.boards = [
            Board(board="g", title="Technology", meta_description="&quot;/g/&quot; is <b>tech</b>", pages=3),
            Board(board="v", title="Video Games", pages=10),
        ]
        self.pages = {
            ("g", 1): [_thread(10, with_media=True), _thread(20)],
            ("g", 2): [_thread(30)],
            ("g", 3): [_thread(40), _thread(50), _thread(60)],
        }
        self.threads = {
            10: [Post(no=10), Post(no=11, attachment=Attachment("a", ".webm", 777)), Post(no=12)],
            20: [Post(no=20)],
        }
        self.fail = False
        self.calls: list[tuple] = []

    def _check(self, url: str) -> None:
        if self.fail:
            raise FetchError(url, "boom")

    def fetch_boards(self) -> list[Board]:
        self.calls.append(("boards",))
        self._check("boards")
        return list(self.boards)

    def fetch_threads(self, board: str, page: int) -> list[Thread]:
        self.calls.append(("threads", board, page))
        self._check(f"{board}/{page}")
        return list(self.pages.get((board, page), []))

    def fetch_thread(self, board: str, op_id: int) -> list[Post]:
        self.calls.append(("thread", board, op_id))
        self._check(f"{board}/thread/{op_id}")
        return list(self.threads.get(op_id, []))


class ControllerTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.state = AppState()
        self.client = FakeClient()
        self.copied: list[str] = []
        self.opened: list[str] = []
        self.controller = NavigationController(
            self.state,
            self.client,
            Keybinds(),
            copy_text=lambda text: self.copied.append(text) or True,
            open_url=lambda url: self.opened.append(url) or True,
        )
        self.assertTrue(self.controller.load_boards())

    def press(self, *keys: str) -> bool:
        quit_requested = False
        for key in keys:
            quit_requested = self.controller.handle_key(key)
        return quit_requested


class NavigationTests(ControllerTestCase):
    def test_initial_load_selects_first_board(self) -> None:
        self.assertEqual(self.state.boards.selected, 0)
        self.assertIs(self.state.focus.focused, Panel.BOARD_LIST)

    def test_moves_use_configured_and_alias_keys(self) -> None:
        self.press("s")
        self.assertEqual(self.state.boards.selected, 1)
        self.press("UP")
        self.assertEqual(self.state.boards.selected, 0)
        self.press("w")
        self.assertEqual(self.state.boards.selected, 1)
        self.press("CTRL_S")
        self.assertEqual(self.state.boards.selected, 0)

    def test_enter_board_fetches_first_page(self) -> None:
        self.press("d")

        state = self.state
        self.assertIs(state.focus.focused, Panel.THREAD_LIST)
        self.assertEqual(self.client.calls[-1], ("threads", "g", 1))
        self.assertEqual(state.current_board.board, "g")
        self.assertEqual(state.pagination.page, 1)
        self.assertEqual(state.pagination.page_count, 3)
        self.assertEqual(state.threads.selected, 0)
        self.assertEqual(state.board_description, '"/g/" is tech')

    def test_enter_thread_fetches_posts(self) -> None:
        self.press("ENTER", "ENTER")

        state = self.state
        self.assertIs(state.focus.focused, Panel.THREAD)
        self.assertEqual(self.client.calls[-1], ("thread", "g", 10))
        self.assertEqual([post.no for post in state.posts.items], [10, 11, 12])
        self.assertEqual(state.posts.selected, 0)
        self.assertEqual(state.focus.visibility, (False, True, True))

    def test_forward_from_thread_is_noop(self) -> None:
        self.press("d", "d")
        calls = len(self.client.calls)
        self.press("d")
        self.assertEqual(len(self.client.calls), calls)

    def test_back_keys(self) -> None:
        self.press("d", "d", "a")
        self.assertIs(self.state.focus.focused, Panel.THREAD_LIST)
        self.press("BACKSPACE")
        self.assertIs(self.state.focus.focused, Panel.BOARD_LIST)
        self.press("CTRL_A")
        self.assertIs(self.state.focus.focused, Panel.BOARD_LIST)

    def test_fetch_failure_leaves_state_untouched(self) -> None:
        self.client.fail = True

        with self.assertLogs("lazychan.runtime.controller", level="ERROR"):
            self.press("d")

        self.assertIs(self.state.focus.focused, Panel.BOARD_LIST)
        self.assertFalse(self.state.focus.thread_list_visible)
        self.assertIsNone(self.state.pagination)
        self.assertIn("boom", self.state.status_message)

    def test_new_board_resets_pagination(self) -> None:
        self.press("d", "p")
        self.assertEqual(self.state.pagination.page, 2)
        self.press("a", "s", "d")
        self.assertEqual(self.state.current_board.board, "v")
        self.assertEqual(self.state.pagination.page, 1)
        self.assertEqual(self.state.pagination.page_count, 10)

    def test_fullscreen_and_help_toggle(self) -> None:
        self.press("d", "z")
        self.assertEqual(self.state.focus.visibility, (False, True, False))
        self.press("h")
        self.assertTrue(self.state.show_help)
        self.press("h")
        self.assertFalse(self.state.show_help)

    def test_quit(self) -> None:
        self.assertFalse(self.press("x"))
        self.assertTrue(self.press("q"))


class PaginationTests(ControllerTestCase):
    def test_next_and_previous_page_wrap(self) -> None:
        self.press("d")

        self.press("p")
        self.assertEqual(self.state.pagination.page, 2)
        self.assertEqual([t.opening_post.no for t in self.state.threads.items], [30])
        self.assertIsNone(self.state.threads.selected)

        self.press("p")
        self.press("p")
        self.assertEqual(self.state.pagination.page, 1)

        self.press("CTRL_P")
        self.assertEqual(self.state.pagination.page, 3)
        self.assertEqual(self.client.calls[-1], ("threads", "g", 3))

    def test_page_keys_ignored_outside_thread_list(self) -> None:
        calls = len(self.client.calls)
        self.press("p")
        self.assertEqual(len(self.client.calls), calls)

    def test_failed_page_change_keeps_page(self) -> None:
        self.press("d")
        self.client.fail = True

        with self.assertLogs("lazychan.runtime.controller", level="ERROR"):
            self.press("p")

        self.assertEqual(self.state.pagination.page, 1)
        self.assertEqual(len(self.state.threads), 2)


class ReloadTests(ControllerTestCase):
    def test_reload_board_list(self) -> None:
        self.press("s", "r")
        self.assertEqual(self.client.calls[-1], ("boards",))
        self.assertEqual(self.state.boards.selected, 0)

    def test_reload_thread_list_keeps_page_and_selects_first(self) -> None:
        self.press("d", "p", "p", "s", "s", "r")
        self.assertEqual(self.client.calls[-1], ("threads", "g", 3))
        self.assertEqual(self.state.pagination.page, 3)
        self.assertEqual(self.state.threads.selected, 0)

    def test_reload_thread(self) -> None:
        self.press("d", "d", "s", "r")
        self.assertEqual(self.client.calls[-1], ("thread", "g", 10))
        self.assertEqual(self.state.posts.selected, 0)


class LinkActionTests(ControllerTestCase):
    def test_copy_board_link(self) -> None:
        self.press("c")
        self.assertEqual(self.copied, ["https://boards.4chan.org/g/"])
        self.assertIn("Copied", self.state.status_message)

    def test_open_thread_link(self) -> None:
        self.press("d", "o")
        self.assertEqual(self.opened, ["https://boards.4chan.org/g/thread/10"])

    def test_post_link_and_media(self) -> None:
        self.press("d", "d", "s", "c", "CTRL_C", "CTRL_O")
        self.assertEqual(
            self.copied,
            ["https://boards.4chan.org/g/thread/10#p11", "https://i.4cdn.org/g/777.webm"],
        )
        self.assertEqual(self.opened, ["https://i.4cdn.org/g/777.webm"])

    def test_thread_list_media_uses_opening_post(self) -> None:
        self.press("d", "CTRL_C")
        self.assertEqual(self.copied, ["https://i.4cdn.org/g/1010.png"])

    def test_missing_media_sets_status(self) -> None:
        self.press("d", "s", "CTRL_C")
        self.assertEqual(self.copied, [])
        self.assertEqual(self.state.status_message, "No media on selection")

    def test_media_on_board_list_is_noop(self) -> None:
        self.press("CTRL_O")
        self.assertEqual(self.opened, [])

    def test_clipboard_failure_is_reported(self) -> None:
        self.controller._copy_text = lambda text: False
        with self.assertLogs("lazychan.runtime.controller", level="WARNING"):
            self.press("c")
        self.assertEqual(self.state.status_message, "Clipboard unavailable")


class StatusExpiryTests(ControllerTestCase):
    def test_tick_expires_status_message(self) -> None:
        self.press("c")
        until = self.state.status_message_until
        self.state.dirty = False

        self.controller.on_tick(now=until - 1.0)
        self.assertTrue(self.state.status_message)
        self.controller.on_tick(now=until + 0.1)
        self.assertEqual(self.state.status_message, "")
        self.assertTrue(self.state.dirty)


if __name__ == "__main__":
    unittest.main()
