"""Command-line front door for lazychan.

Parses CLI options, sets up file logging and resolves the content provider.
Then either prints a one-shot render or launches the interactive browser.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .client import DEFAULT_PROVIDER_NAME, ChanProvider, FetchError, available_provider_names, provider_from_name
from .formatting.post import DisplayMode
from .render import render_posts_text
from .runtime import run_browser
from .runtime.config import DEFAULT_LOG_PATH, load_default_provider, load_theme_name, save_theme_name
from .ui_theme import available_theme_names, normalize_theme_name, resolve_theme

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def configure_logging(log_file: Path | None, verbose: bool) -> None:
    """Send ``lazychan`` logs to a file so they never land on the TUI.

    Replaces any handler from an earlier call, so repeated calls keep one file open.
    """
    package_logger = logging.getLogger("lazychan")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    for old_handler in list(package_logger.handlers):
        package_logger.removeHandler(old_handler)
        old_handler.close()
    path = log_file if log_file is not None else DEFAULT_LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)


def resolve_provider(name: str | None) -> ChanProvider:
    """Return the provider for ``name`` or exit with a diagnostic."""
    requested = name if name is not None else (load_default_provider() or DEFAULT_PROVIDER_NAME)
    provider = provider_from_name(requested)
    if provider is None:
        logger.error("unknown provider %r", requested)
        raise SystemExit(f'Imageboard name "{requested}" is not valid.')
    logger.info("using provider %s", provider.name)
    return provider


def parse_render_target(target: str) -> tuple[str, int | None]:
    """Split ``BOARD`` or ``BOARD/OPID`` into its parts."""
    board, sep, thread = target.strip().strip("/").partition("/")
    if not board:
        raise SystemExit(f"Invalid render target: {target!r}")
    if not sep:
        return board, None
    try:
        return board, int(thread)
    except ValueError:
        raise SystemExit(f"Invalid thread id in render target: {target!r}") from None


def render_target_text(
    provider: ChanProvider,
    target: str,
    *,
    page: int,
    max_cols: int,
    no_color: bool,
    theme_name: str | None,
) -> str:
    """Fetch and render one thread-list page or one thread as text."""
    from .runtime.app import build_client

    board, thread_id = parse_render_target(target)
    theme = resolve_theme(theme_name, no_color=no_color)
    client = build_client(provider)
    try:
        if thread_id is None:
            threads = client.fetch_threads(board, page)
            posts = [thread.opening_post for thread in threads]
            return render_posts_text(posts, DisplayMode.SHORT, max_cols, theme)
        posts = client.fetch_thread(board, thread_id)
    except FetchError as exc:
        raise SystemExit(f"Failed to load {target}: {exc}") from exc
    return render_posts_text(posts, DisplayMode.FULL, max_cols, theme)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazychan."""
    parser = argparse.ArgumentParser(description="Browse image boards in the terminal.")
    parser.add_argument(
        "provider",
        nargs="?",
        default=None,
        help=f"Imageboard name ({', '.join(available_provider_names())}).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--render",
        metavar="BOARD[/THREAD]",
        help="Print a thread-list page or a thread and exit.",
    )
    parser.add_argument(
        "--page",
        type=_positive_int,
        default=1,
        help="Thread-list page for --render (default: 1).",
    )
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help=f"Log file (default: {DEFAULT_LOG_PATH}).")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    args = parser.parse_args(argv)

    configure_logging(args.log_file, args.verbose)
    provider = resolve_provider(args.provider)
    theme_name = args.theme if args.theme is not None else load_theme_name()

    if args.render is not None:
        max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
        sys.stdout.write(
            render_target_text(
                provider,
                args.render,
                page=args.page,
                max_cols=max_cols,
                no_color=args.no_color or not sys.stdout.isatty(),
                theme_name=theme_name,
            )
        )
        return

    if args.theme is not None:
        save_theme_name(normalize_theme_name(args.theme))
    run_browser(provider, theme_name=theme_name, no_color=args.no_color)


if __name__ == "__main__":
    main()
