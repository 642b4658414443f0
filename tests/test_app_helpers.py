"""Clipboard, browser and status-message helpers."""

from __future__ import annotations

import subprocess
import unittest
import webbrowser
from unittest import mock

from lazychan.runtime import app_helpers
from lazychan.runtime.state import AppState


class ClipboardTests(unittest.TestCase):
    def test_empty_text_is_not_copied(self) -> None:
        self.assertFalse(app_helpers.copy_text_to_clipboard(""))

    def test_first_available_command_is_used(self) -> None:
        completed = subprocess.CompletedProcess(args=["xclip"], returncode=0)
        with mock.patch.object(app_helpers.sys, "platform", "linux"), mock.patch.object(
            app_helpers.os, "name", "posix"
        ), mock.patch(
            "lazychan.runtime.app_helpers.shutil.which",
            side_effect=lambda name: "/usr/bin/xclip" if name == "xclip" else None,
        ), mock.patch("lazychan.runtime.app_helpers.subprocess.run", return_value=completed) as run_mock:
            self.assertTrue(app_helpers.copy_text_to_clipboard("https://example.org"))

        command = run_mock.call_args.args[0]
        self.assertEqual(command, ["xclip", "-selection", "clipboard"])
        self.assertEqual(run_mock.call_args.kwargs["input"], "https://example.org")

    def test_no_tool_available(self) -> None:
        with mock.patch("lazychan.runtime.app_helpers.shutil.which", return_value=None):
            self.assertFalse(app_helpers.copy_text_to_clipboard("x"))


class BrowserTests(unittest.TestCase):
    def test_open_in_browser(self) -> None:
        with mock.patch("lazychan.runtime.app_helpers.webbrowser.open", return_value=True) as open_mock:
            self.assertTrue(app_helpers.open_in_browser("https://example.org"))
        open_mock.assert_called_once_with("https://example.org", new=2)

    def test_browser_error_is_reported_as_false(self) -> None:
        with mock.patch(
            "lazychan.runtime.app_helpers.webbrowser.open",
            side_effect=webbrowser.Error("no browser"),
        ):
            with self.assertLogs("lazychan.runtime.app_helpers", level="WARNING"):
                self.assertFalse(app_helpers.open_in_browser("https://example.org"))


class StatusMessageTests(unittest.TestCase):
    def test_set_and_expire(self) -> None:
        state = AppState(dirty=False)
        app_helpers.set_status_message(state, "hello", seconds=2.0)

        self.assertEqual(state.status_message, "hello")
        self.assertTrue(state.dirty)
        self.assertFalse(app_helpers.expire_status_message(state, now=state.status_message_until - 0.5))
        self.assertTrue(app_helpers.expire_status_message(state, now=state.status_message_until))
        self.assertEqual(state.status_message, "")
        self.assertFalse(app_helpers.expire_status_message(state, now=0.0))


if __name__ == "__main__":
    unittest.main()
