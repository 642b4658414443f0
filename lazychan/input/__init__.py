"""Input-layer public API: raw key decoding, keybinds and dispatch tables."""

from __future__ import annotations

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keybinds import (
    Keybinds,
    KeybindsError,
    KeySpecError,
    KeySpecErrorKind,
    display_key,
    parse_keymap,
    parse_keyspec,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeySpecError",
    "KeySpecErrorKind",
    "Keybinds",
    "KeybindsError",
    "_PENDING_BYTES",
    "display_key",
    "parse_keymap",
    "parse_keyspec",
    "read_key",
]
