"""Help bar content.

Key names come from the active keybinds so the bar always matches the
keys the user configured. Presentation-only and side-effect free.
"""

from __future__ import annotations

from ..input.keybinds import Keybinds, display_key
from ..ui_theme import UITheme

HELP_ROWS = 10


def help_panel_lines(keybinds: Keybinds, theme: UITheme) -> list[str]:
    """Return exactly ``HELP_ROWS`` styled help lines."""

    def key(*names: str) -> str:
        return "/".join(
            f"{theme.help_key}{display_key(getattr(keybinds, name))}{theme.reset}" for name in names
        )

    lines = [
        f"{theme.help_heading}KEYS{theme.reset}",
        f"{key('up', 'left', 'down', 'right')} or arrows move",
        f"{key('quick_up', 'quick_left', 'quick_down', 'quick_right')} move quickly",
        f"{theme.help_key}Enter{theme.reset} open  {theme.help_key}Backspace{theme.reset} back",
        f"{key('page_next', 'page_previous')} next/previous page",
        f"{key('copy_thread')} copy url  {key('open_thread')} open url in browser",
        f"{key('copy_media')} copy media url  {key('open_media')} open media in browser",
        f"{key('fullscreen')} fullscreen  {key('reload')} reload",
        f"{key('help')} toggle help  {key('quit')} quit",
    ]
    lines.extend([""] * (HELP_ROWS - len(lines)))
    return lines[:HELP_ROWS]


__all__ = ["HELP_ROWS", "help_panel_lines"]
