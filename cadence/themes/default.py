"""Plain theme using the stock typography defaults."""

from __future__ import annotations

from ..config import ThemeConfig

NAME = "default"


def theme() -> ThemeConfig:
    return ThemeConfig(base_font_size="16px", base_line_height=1.45, title="Default")
