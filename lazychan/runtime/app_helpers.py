"""Side-effecting helpers used by the navigation controller."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import time
import webbrowser

from .state import AppState

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 3.0


def copy_text_to_clipboard(text: str) -> bool:
    """Best-effort clipboard copy across macOS, Windows, and common Linux tools."""
    if not text:
        return False

    command_candidates: list[list[str]] = []
    if sys.platform == "darwin":
        command_candidates.append(["pbcopy"])
    elif os.name == "nt":
        command_candidates.append(["clip"])
    else:
        command_candidates.extend(
            [
                ["wl-copy"],
                ["xclip", "-selection", "clipboard"],
                ["xsel", "--clipboard", "--input"],
            ]
        )

    for command in command_candidates:
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            logger.warning("clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
    return False


def open_in_browser(url: str) -> bool:
    """Open ``url`` in the user's browser, returning whether it was handed off."""
    try:
        return bool(webbrowser.open(url, new=2))
    except webbrowser.Error as exc:
        logger.warning("could not open browser for %s: %s", url, exc)
        return False


def set_status_message(state: AppState, message: str, seconds: float = STATUS_MESSAGE_SECONDS) -> None:
    """Set transient status message visible for a fixed short interval."""
    state.status_message = message
    state.status_message_until = time.monotonic() + seconds
    state.dirty = True


def expire_status_message(state: AppState, now: float | None = None) -> bool:
    """Clear the status message once its interval elapsed; return whether it changed."""
    if not state.status_message:
        return False
    current = time.monotonic() if now is None else now
    if current < state.status_message_until:
        return False
    state.status_message = ""
    state.status_message_until = 0.0
    state.dirty = True
    return True
