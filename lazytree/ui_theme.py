"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the tree, its chrome, and the help overlay.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    border: str
    title: str
    tree_guide: str
    tree_root_path: str
    tree_dir: str
    status: str
    status_search: str
    key_bar_key: str
    key_bar_label: str
    message: str
    help_heading: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[38;5;44m",
    title="\033[1;38;5;81m",
    tree_guide="\033[38;5;44m",
    tree_root_path="\033[1;34m",
    tree_dir="\033[38;5;252m",
    status="\033[38;5;250m",
    status_search="\033[1;38;5;81m",
    key_bar_key="\033[38;5;229m",
    key_bar_label="\033[30;48;5;44m",
    message="\033[1;38;5;203m",
    help_heading="\033[1;38;5;81m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    title="\033[1;38;5;45m",
    tree_guide="\033[38;5;39m",
    tree_root_path="\033[1;38;5;45m",
    tree_dir="\033[38;5;153m",
    status="\033[38;5;110m",
    status_search="\033[1;38;5;45m",
    key_bar_key="\033[38;5;117m",
    key_bar_label="\033[30;48;5;39m",
    message="\033[1;38;5;210m",
    help_heading="\033[1;38;5;45m",
    help_key="\033[38;5;117m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    border="",
    title="",
    tree_guide="",
    tree_root_path="",
    tree_dir="",
    status="",
    status_search="",
    key_bar_key="",
    key_bar_label="",
    message="",
    help_heading="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> list[str]:
    return sorted(_THEMES)


def get_theme(name: str | None) -> UITheme:
    """Return the named theme, falling back to ``DEFAULT_THEME`` for unknown names."""
    if not name:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)
