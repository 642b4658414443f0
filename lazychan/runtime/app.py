"""Runtime composition layer for lazychan.

Builds the fetch client, keybinds, theme and initial state, loads the board
list, then hands everything to the event loop.
"""

from __future__ import annotations

import logging
import sys

from ..client import ChanClient, ChanProvider, HttpConfig
from ..ui_theme import resolve_theme
from .app_helpers import set_status_message
from .config import load_keybinds, load_max_retries, load_request_timeout, load_theme_name
from .controller import NavigationController
from .events import EventSource
from .loop import run_main_loop
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_client(provider: ChanProvider) -> ChanClient:
    """Create a fetch client with timeout/retry settings from the config file."""
    config = HttpConfig(timeout_sec=load_request_timeout(), max_retries=load_max_retries())
    return ChanClient(provider, config)


def run_browser(
    provider: ChanProvider,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive browser for ``provider`` until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    theme = resolve_theme(theme_name if theme_name is not None else load_theme_name(), no_color=no_color)
    keybinds, keybinds_error = load_keybinds()

    state = AppState()
    controller = NavigationController(state, build_client(provider), keybinds)
    logger.info("starting browser for provider %s", provider.name)
    controller.load_boards()
    if keybinds_error is not None:
        set_status_message(state, keybinds_error, seconds=6.0)

    terminal = TerminalController(stdin_fd, stdout_fd)
    events = EventSource(stdin_fd)
    run_main_loop(state, terminal, events, controller, keybinds, theme)


__all__ = ["build_client", "run_browser"]
