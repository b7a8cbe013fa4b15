"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the filesystems table and the filter prompt.
Each field is an SGR prefix; ``styled`` closes it with the theme reset.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    default: str
    selected_line: str
    char_match: str
    selected_char_match: str
    border: str
    selected_border: str
    scrollbar_thumb: str
    scrollbar_track: str
    filter_query: str
    filter_hint: str
    # 256-color indices from low to high usage; empty disables usage coloring.
    share_colors: tuple[int, ...] = ()

    def styled(self, style: str, text: str) -> str:
        """Wrap ``text`` in ``style`` and the theme reset (no-op for empty styles)."""
        if not style or not text:
            return text
        return f"{style}{text}{self.reset}"

    def share_color(self, share: float) -> int | None:
        """Map a usage fraction in ``[0, 1]`` to its severity color index."""
        if not self.share_colors:
            return None
        idx = int(max(0.0, share) * len(self.share_colors))
        return self.share_colors[min(idx, len(self.share_colors) - 1)]

    def share_fg(self, share: float) -> str:
        color = self.share_color(share)
        return "" if color is None else f"\033[38;5;{color}m"

    def share_bg(self, share: float) -> str:
        color = self.share_color(share)
        return "" if color is None else f"\033[48;5;{color}m"


SHARE_COLORS: tuple[int, ...] = (28, 29, 29, 29, 29, 100, 136, 172, 166, 196)

DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    default="",
    selected_line="\033[48;5;240m",
    char_match="\033[1;38;5;41m",
    selected_char_match="\033[1;38;5;41;48;5;240m",
    border="\033[38;5;239m",
    selected_border="\033[38;5;239;48;5;240m",
    scrollbar_thumb="\033[38;5;249m",
    scrollbar_track="\033[38;5;235m",
    filter_query="\033[1;38;5;81m",
    filter_hint="\033[2;38;5;250m",
    share_colors=SHARE_COLORS,
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    default="",
    selected_line="\033[48;5;24m",
    char_match="\033[1;38;5;45m",
    selected_char_match="\033[1;38;5;45;48;5;24m",
    border="\033[2;38;5;31m",
    selected_border="\033[38;5;31;48;5;24m",
    scrollbar_thumb="\033[38;5;117m",
    scrollbar_track="\033[38;5;23m",
    filter_query="\033[1;38;5;45m",
    filter_hint="\033[2;38;5;110m",
    share_colors=SHARE_COLORS,
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    default="",
    selected_line="",
    char_match="",
    selected_char_match="",
    border="",
    selected_border="",
    scrollbar_thumb="",
    scrollbar_track="",
    filter_query="",
    filter_hint="",
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


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "SHARE_COLORS",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
