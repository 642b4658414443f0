"""Composition of the interactive browser session."""

from __future__ import annotations

import unittest
from unittest import mock

from lazychan.client import FetchError, FourChanProvider
from lazychan.input.keybinds import Keybinds
from lazychan.model import Board
from lazychan.runtime import app
from lazychan.ui_theme import OCEAN_THEME, PLAIN_THEME


class _Client:
    provider = FourChanProvider()

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail

    def fetch_boards(self) -> list[Board]:
        if self.fail:
            raise FetchError("https://a.4cdn.org/boards.json", "offline")
        return [Board(board="g", title="Technology")]


class RunBrowserTests(unittest.TestCase):
    def _run(self, client: _Client, keybinds_result, **kwargs):
        with mock.patch.object(app, "build_client", return_value=client), mock.patch.object(
            app, "load_keybinds", return_value=keybinds_result
        ), mock.patch.object(app, "load_theme_name", return_value="ocean"), mock.patch.object(
            app, "TerminalController"
        ) as terminal_cls, mock.patch.object(app, "run_main_loop") as loop_mock, mock.patch.object(
            app, "sys"
        ) as sys_mock:
            sys_mock.stdin.fileno.return_value = 0
            sys_mock.stdout.fileno.return_value = 1
            app.run_browser(FourChanProvider(), **kwargs)
        terminal_cls.assert_called_once_with(0, 1)
        return loop_mock.call_args.args

    def test_loads_boards_before_loop(self) -> None:
        state, _terminal, events, controller, keybinds, theme = self._run(_Client(), (Keybinds(), None))

        self.assertEqual(state.boards.selected, 0)
        self.assertIs(controller.state, state)
        self.assertEqual(events.stdin_fd, 0)
        self.assertFalse(events.running)
        self.assertIs(theme, OCEAN_THEME)
        self.assertEqual(state.status_message, "")

    def test_no_color_and_keybind_problem(self) -> None:
        custom = Keybinds(quit="x")
        state, _terminal, _events, controller, keybinds, theme = self._run(
            _Client(), (custom, "keybinds line 3: bad; using default keybinds"), no_color=True
        )

        self.assertIs(theme, PLAIN_THEME)
        self.assertIs(keybinds, custom)
        self.assertTrue(controller.handle_key("x"))
        self.assertIn("line 3", state.status_message)

    def test_board_fetch_failure_still_starts_loop(self) -> None:
        with self.assertLogs("lazychan.runtime.controller", level="ERROR"):
            state, *_ = self._run(_Client(fail=True), (Keybinds(), None))

        self.assertEqual(len(state.boards), 0)
        self.assertIn("offline", state.status_message)


if __name__ == "__main__":
    unittest.main()
