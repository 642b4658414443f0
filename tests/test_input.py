"""Regression tests for raw-key decoding.

Covers ESC timing, arrow/meta sequences, and control-key token mapping.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from lazychan.input import reader as input_mod
from lazychan.input.keybinds import parse_keyspec


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read(self, data: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, data)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_printable_and_utf8_characters(self) -> None:
        self.assertEqual(self._read(b"w"), ["w"])
        self.assertEqual(self._read("é".encode("utf-8")), ["é"])

    def test_control_keys(self) -> None:
        self.assertEqual(self._read(b"\x17"), ["CTRL_W"])
        self.assertEqual(self._read(b"\x03"), ["CTRL_C"])
        self.assertEqual(self._read(b"\r\x7f\t", count=3), ["ENTER", "BACKSPACE", "TAB"])

    def test_bindable_ctrl_letters_arrive_as_ctrl_tokens(self) -> None:
        for letter in "abcdefgklnopqrstuvwxyz":
            byte = bytes([ord(letter) - 0x60])
            self.assertEqual(self._read(byte), [parse_keyspec(f"Ctrl {letter}")])

    def test_arrow_and_navigation_sequences(self) -> None:
        self.assertEqual(self._read(b"\x1b[A"), ["UP"])
        self.assertEqual(self._read(b"\x1bOB"), ["DOWN"])
        self.assertEqual(self._read(b"\x1b[6~"), ["PAGEDOWN"])
        self.assertEqual(self._read(b"\x1b[Z"), ["BACKTAB"])

    def test_modified_arrow_decodes_to_plain_arrow(self) -> None:
        self.assertEqual(self._read(b"\x1b[1;5C"), ["RIGHT"])

    def test_escape_followed_by_printable_is_alt(self) -> None:
        self.assertEqual(self._read(b"\x1ba"), ["ALT_a"])

    def test_escape_before_control_byte_keeps_following_key(self) -> None:
        self.assertEqual(self._read(b"\x1b\x17", count=2), ["ESC", "CTRL_W"])

    def test_timeout_returns_empty_token(self) -> None:
        self.assertEqual(self._read(b""), [""])


if __name__ == "__main__":
    unittest.main()
