"""Main interactive event loop for the terminal UI.

Consumes events one at a time from ``EventSource``: ticks drive status
expiry and resize detection, keys go to ``NavigationController``. A frame
is rendered whenever the state is dirty.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable

from ..input.keybinds import Keybinds
from ..render import Frame, build_frame, render_frame
from ..ui_theme import UITheme
from .controller import NavigationController
from .events import EventKind, EventSource
from .state import AppState
from .terminal import TerminalController


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    events: EventSource,
    controller: NavigationController,
    keybinds: Keybinds,
    theme: UITheme,
    *,
    terminal_size: Callable[[], tuple[int, int]] = _terminal_size,
    write_frame: Callable[[Frame], None] = render_frame,
) -> None:
    """Run the interactive TUI loop until a quit action occurs."""
    with terminal.raw_mode():
        events.start()
        try:
            consume_events(
                state,
                events,
                controller,
                keybinds,
                theme,
                terminal_size=terminal_size,
                write_frame=write_frame,
            )
        finally:
            events.stop()


def consume_events(
    state: AppState,
    events: EventSource,
    controller: NavigationController,
    keybinds: Keybinds,
    theme: UITheme,
    *,
    terminal_size: Callable[[], tuple[int, int]] = _terminal_size,
    write_frame: Callable[[Frame], None] = render_frame,
) -> None:
    """Render-then-dispatch until the controller reports quit."""
    last_size: tuple[int, int] | None = None
    while True:
        size = terminal_size()
        if size != last_size:
            last_size = size
            state.dirty = True
        if state.dirty:
            frame = build_frame(state, keybinds, theme, size[0], size[1])
            for panel, start in frame.starts.items():
                state.set_scroll_start(panel, start)
            write_frame(frame)
            state.dirty = False

        event = events.next()
        if event is None:
            continue
        if event.kind is EventKind.TICK:
            controller.on_tick()
            continue
        if controller.handle_key(event.key):
            return


__all__ = ["consume_events", "run_main_loop"]
