"""UI theme definitions and selection helpers.

Themes are ANSI palettes for panel chrome and post content. Post rendering
emits semantic span roles; this module maps them onto a palette.
"""

from __future__ import annotations

from dataclasses import dataclass

from .formatting.post import SpanRole, StyledLine


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    title: str
    title_focused: str
    board_id: str
    subject: str
    header: str
    counter: str
    glyph: str
    attachment: str
    quote: str
    reply: str
    cut_marker: str
    replies: str
    help_heading: str
    help_key: str
    status: str

    def style_for(self, role: SpanRole) -> str:
        """Return the ANSI prefix for a post span role (``""`` for plain text)."""
        if role is SpanRole.TEXT:
            return ""
        return getattr(self, role.value)


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1m",
    title_focused="\033[1;38;5;81m",
    board_id="\033[1;38;5;110m",
    subject="\033[1;31m",
    header="\033[38;5;252m",
    counter="\033[33m",
    glyph="",
    attachment="\033[3;36m",
    quote="\033[32m",
    reply="\033[33m",
    cut_marker="\033[35m",
    replies="\033[3;35m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    status="\033[38;5;214m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    title="\033[1;38;5;117m",
    title_focused="\033[1;38;5;45m",
    board_id="\033[1;38;5;45m",
    subject="\033[1;38;5;203m",
    header="\033[38;5;153m",
    counter="\033[2;38;5;110m",
    glyph="",
    attachment="\033[38;5;73m",
    quote="\033[38;5;84m",
    reply="\033[38;5;215m",
    cut_marker="\033[38;5;176m",
    replies="\033[2;38;5;110m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;153m",
    status="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    title="",
    title_focused="",
    board_id="",
    subject="",
    header="",
    counter="",
    glyph="",
    attachment="",
    quote="",
    reply="",
    cut_marker="",
    replies="",
    help_heading="",
    help_key="",
    status="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def styled_line_to_ansi(line: StyledLine, theme: UITheme) -> str:
    """Join a styled line into one ANSI string, resetting after each styled span."""
    parts: list[str] = []
    for span in line:
        style = theme.style_for(span.role)
        if style:
            parts.append(f"{style}{span.text}{theme.reset}")
        else:
            parts.append(span.text)
    return "".join(parts)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "styled_line_to_ansi",
]
