"""Color palette for the practice application supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#1E1E1E", dark="#F5F5F5")
    TEXT_MUTED = ThemeColors(light="#666666", dark="#AAAAAA")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")

    ACCENT = ThemeColors(light="#0078D4", dark="#4A9EFF")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")
    ACCENT_SOFT = ThemeColors(light="#E5F1FB", dark="#1B3A57")

    # Answer review and clock states
    SUCCESS = ThemeColors(light="#107C10", dark="#6FCF6F")
    ERROR = ThemeColors(light="#D13438", dark="#FF6B6B")

    BORDER = ThemeColors(light="#D1D1D1", dark="#555555")
    BUTTON_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")
