"""Keybind specs and the ``name=keyspec`` configuration file format.

A keyspec is a key name optionally preceded by one modifier, separated by a
space (``w``, ``Ctrl w``, ``Alt z``, ``PageDown``). Space is the separator
because ``+`` is itself a valid key name. Specs parse to the key tokens that
``read_key`` produces, so dispatch is a plain dictionary lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from enum import Enum

logger = logging.getLogger(__name__)

SPECIAL_KEYS: dict[str, tuple[str, str]] = {
    # lowercase name -> (token, display name)
    "backspace": ("BACKSPACE", "Backspace"),
    "left": ("LEFT", "Left"),
    "right": ("RIGHT", "Right"),
    "up": ("UP", "Up"),
    "down": ("DOWN", "Down"),
    "home": ("HOME", "Home"),
    "end": ("END", "End"),
    "pageup": ("PAGEUP", "PageUp"),
    "pagedown": ("PAGEDOWN", "PageDown"),
    "backtab": ("BACKTAB", "BackTab"),
    "delete": ("DELETE", "Delete"),
    "insert": ("INSERT", "Insert"),
    "esc": ("ESC", "Esc"),
}
_SPECIAL_DISPLAY = {token: display for token, display in SPECIAL_KEYS.values()}


class KeySpecErrorKind(Enum):
    MISSING_KEY_NAME = "missing key name"
    INVALID_CHARACTER_KEY_NAME = "key character must be printable ASCII"
    INVALID_SPECIAL_KEY_NAME = "unknown special key name"
    TOO_MANY_MODIFIERS = "too many modifiers"
    UNKNOWN_MODIFIER = "unknown modifier (use Ctrl or Alt)"
    MODIFIER_WITH_SPECIAL_KEY = "modifiers cannot be combined with special keys"
    UNSUPPORTED_CTRL_KEY = "Ctrl only combines with letters other than h, i, j, m"


# The terminal sends these as Backspace, Tab and Enter.
CTRL_RESERVED_LETTERS = frozenset("hijm")


class KeySpecError(ValueError):
    def __init__(self, kind: KeySpecErrorKind, spec: str) -> None:
        super().__init__(f"{kind.value}: {spec!r}")
        self.kind = kind
        self.spec = spec


class KeybindsError(ValueError):
    """Problem on one line of a keybinds file."""

    def __init__(
        self,
        line_no: int,
        reason: str,
        *,
        name: str | None = None,
        keybind: str | None = None,
    ) -> None:
        location = f"line {line_no}"
        if name:
            location += f" ({name})"
        super().__init__(f"keybinds {location}: {reason}")
        self.line_no = line_no
        self.reason = reason
        self.name = name
        self.keybind = keybind


def parse_keyspec(spec: str) -> str:
    """Parse a keyspec into a key token, raising :class:`KeySpecError`."""
    parts = spec.split(" ")
    keyname = parts.pop()
    if not keyname:
        raise KeySpecError(KeySpecErrorKind.MISSING_KEY_NAME, spec)
    modifier = parts.pop() if parts else None
    if parts:
        raise KeySpecError(KeySpecErrorKind.TOO_MANY_MODIFIERS, spec)
    if modifier == "":
        modifier = None

    if len(keyname) == 1:
        if not ("!" <= keyname <= "~"):
            raise KeySpecError(KeySpecErrorKind.INVALID_CHARACTER_KEY_NAME, spec)
        if modifier is None:
            return keyname
        lowered = modifier.lower()
        if lowered == "ctrl":
            if not keyname.isalpha() or keyname.lower() in CTRL_RESERVED_LETTERS:
                raise KeySpecError(KeySpecErrorKind.UNSUPPORTED_CTRL_KEY, spec)
            return f"CTRL_{keyname.upper()}"
        if lowered == "alt":
            return f"ALT_{keyname}"
        raise KeySpecError(KeySpecErrorKind.UNKNOWN_MODIFIER, spec)

    if modifier is not None:
        raise KeySpecError(KeySpecErrorKind.MODIFIER_WITH_SPECIAL_KEY, spec)
    special = SPECIAL_KEYS.get(keyname.lower())
    if special is None:
        raise KeySpecError(KeySpecErrorKind.INVALID_SPECIAL_KEY_NAME, spec)
    return special[0]


def display_key(token: str) -> str:
    """Render a key token back into keyspec form."""
    if token.startswith("CTRL_") and len(token) == 6:
        return f"Ctrl {token[-1].lower()}"
    if token.startswith("ALT_") and len(token) == 5:
        return f"Alt {token[-1]}"
    return _SPECIAL_DISPLAY.get(token, token)


@dataclass(frozen=True)
class Keybinds:
    """Key token bound to each logical action."""

    up: str = "w"
    down: str = "s"
    left: str = "a"
    right: str = "d"
    quick_up: str = "CTRL_W"
    quick_down: str = "CTRL_S"
    quick_left: str = "CTRL_A"
    quick_right: str = "CTRL_D"
    page_next: str = "p"
    page_previous: str = "CTRL_P"
    copy_thread: str = "c"
    open_thread: str = "o"
    copy_media: str = "CTRL_C"
    open_media: str = "CTRL_O"
    fullscreen: str = "z"
    reload: str = "r"
    help: str = "h"
    quit: str = "q"

    @classmethod
    def action_names(cls) -> tuple[str, ...]:
        return tuple(field.name for field in fields(cls))

    @classmethod
    def parse_from_file(cls, contents: str) -> Keybinds:
        """Build keybinds from file contents; unset actions keep defaults."""
        keymap = parse_keymap(contents)
        known = set(cls.action_names())
        for name in keymap:
            if name not in known:
                logger.warning("ignoring unknown keybind name %r", name)
        return cls(**{name: token for name, token in keymap.items() if name in known})

    @classmethod
    def default_file_contents(cls) -> str:
        defaults = cls()
        out = ["# Keybinds for lazychan", ""]
        for name in cls.action_names():
            out.append(f"#{ACTION_DESCRIPTIONS[name]}")
            out.append(f"{name}={display_key(getattr(defaults, name))}")
        return "\n".join(out) + "\n"


ACTION_DESCRIPTIONS: dict[str, str] = {
    "up": "Move up",
    "down": "Move down",
    "left": "Move left",
    "right": "Move right",
    "quick_up": "Move up quickly",
    "quick_down": "Move down quickly",
    "quick_left": "Move left quickly",
    "quick_right": "Move right quickly",
    "page_next": "Next page",
    "page_previous": "Previous page",
    "copy_thread": "Copy the direct url to the selected thread or post",
    "open_thread": "Open the selected thread or post in browser",
    "copy_media": "Copy the selected post media (image/webm) url",
    "open_media": "Open the selected post media (image/webm) in browser",
    "fullscreen": "Toggle fullscreen for the selected panel",
    "reload": "Reload page",
    "help": "Toggle help bar",
    "quit": "Quit",
}


def parse_keymap(contents: str) -> dict[str, str]:
    """Parse ``name=keyspec`` lines into a name -> token mapping.

    Blank lines and ``#`` comments are skipped. Raises :class:`KeybindsError`
    for the first bad line.
    """
    keymap: dict[str, str] = {}
    for line_no, line in enumerate(contents.splitlines(), start=1):
        if not line.strip() or line.startswith("#"):
            continue
        raw_name, sep, raw_value = line.partition("=")
        name = raw_name.strip()
        if not name:
            raise KeybindsError(line_no, "missing keybind name")
        if name in keymap:
            raise KeybindsError(line_no, "keybind already defined", name=name)
        value = raw_value.strip()
        if not sep or not value:
            raise KeybindsError(line_no, "missing keybind value", name=name)
        try:
            keymap[name] = parse_keyspec(value)
        except KeySpecError as exc:
            raise KeybindsError(line_no, exc.kind.value, name=name, keybind=value) from exc
    return keymap


__all__ = [
    "ACTION_DESCRIPTIONS",
    "CTRL_RESERVED_LETTERS",
    "KeySpecError",
    "KeySpecErrorKind",
    "Keybinds",
    "KeybindsError",
    "SPECIAL_KEYS",
    "display_key",
    "parse_keymap",
    "parse_keyspec",
]
