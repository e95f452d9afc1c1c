from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    accent: str
    background: str = "#020617"
    surface: str = "#0f172a"
    text_primary: str = "#f1f5f9"


THEMES: Tuple[Theme, ...] = (
    Theme(id="ypt", name="Study Orange", accent="#f97316"),
    Theme(id="ocean", name="Ocean", accent="#38bdf8", surface="#0c1a2e"),
    Theme(id="forest", name="Forest", accent="#4ade80", surface="#0b1f17"),
    Theme(id="violet", name="Violet", accent="#a78bfa", surface="#1a1333"),
    Theme(id="rose", name="Rose", accent="#fb7185", surface="#25101a"),
    Theme(id="mono", name="Monochrome", accent="#e2e8f0", background="#000000", surface="#111111"),
)

DEFAULT_THEME_ID = THEMES[0].id


def resolve_theme(theme_id: Optional[str]) -> Theme:
    """Look up a theme by id, falling back to the first catalog entry."""

    for theme in THEMES:
        if theme.id == theme_id:
            return theme
    return THEMES[0]
