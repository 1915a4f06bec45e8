"""De Young theme.

Alegreya body text with Alegreya Sans headings on an 18px / 1.78 rhythm.
Links are underlined with a box-shadow that disappears on hover.
"""

from __future__ import annotations

from typing import Any

from ..config import GoogleFont, ThemeConfig
from ..styles import gray

NAME = "de-young"

LINK_COLOR = "#d65947"


def override_styles(engine: Any) -> dict[str, dict[str, Any]]:
    """Theme-specific styles layered over the generated ones."""
    rhythm = engine.rhythm
    return {
        "a": {
            "color": LINK_COLOR,
            "text-decoration": "none",
            "box-shadow": "0 1px 0 0 currentColor",
        },
        "a:hover,a:active": {"box-shadow": "none"},
        "h1,h2,h3,h4,h5,h6": {"margin-top": rhythm(2)},
        "blockquote": {
            **engine.scale(1 / 5).as_css(),
            "color": gray(41),
            "font-style": "italic",
            "padding-left": rhythm(13 / 16),
            "margin-left": 0,
            "border-left": f"{rhythm(3 / 16)} solid {LINK_COLOR}",
        },
        "blockquote > :last-child": {"margin-bottom": 0},
        "blockquote cite": {
            **engine.adjust_font_size_to(f"{engine.base_font_size_px}px").as_css(),
            "color": engine.config.body_color,
            "font-weight": engine.config.body_weight,
        },
        "blockquote cite:before": {"content": '"\\2014 "'},
    }


def theme() -> ThemeConfig:
    return ThemeConfig(
        title="De Young",
        base_font_size="18px",
        base_line_height=1.78,
        scale_ratio=2,
        google_fonts=(
            GoogleFont("Alegreya", ("400", "400i", "700", "700i")),
            GoogleFont("Alegreya Sans", ("400",)),
        ),
        header_font_family=("Alegreya Sans", "sans-serif"),
        body_font_family=("Alegreya", "sans-serif"),
        header_color="hsla(0,0%,0%,0.9)",
        body_color="hsla(0,0%,0%,0.8)",
        header_weight=400,
        body_weight=400,
        bold_weight=700,
        override_styles=override_styles,
    )
