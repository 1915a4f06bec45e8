"""Typography engine for Cadence.

The engine is computed once from a ThemeConfig and is read-only afterwards.
Everything it exposes is a pure function of that config:

- rhythm: vertical spacing in multiples of the base line height.
- scale: font size and line height for a step on the modular scale.
- adjust_font_size_to: font size plus a line height that stays on the rhythm.
- styles / to_css: the global stylesheet for the theme.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote_plus

from .config import StyleTable, ThemeConfig
from .scale import modular_scale
from .styles import compile_styles, create_styles, css_value, merge_style_tables
from .units import Length, convert_length, parse_length, to_px


@dataclass(frozen=True)
class ScaledSize:
    """Font size and matching line height.

    Attributes:
        font_size: Font size in the engine's rhythm unit.
        line_height: Line height on the vertical rhythm, same unit.
    """

    font_size: Length
    line_height: Length

    def as_css(self) -> dict[str, Length]:
        return {"font-size": self.font_size, "line-height": self.line_height}


class TypographyEngine:
    """Deterministic typography calculations for one theme.

    Attributes:
        config: The ThemeConfig the engine was built from.
    """

    def __init__(self, config: ThemeConfig):
        self._config = config
        self._base_px = config.base_font_size_px
        self._line_px = config.base_line_height_px
        self._ratio = config.ratio
        self._min_padding_px = to_px(parse_length(config.min_line_padding), self._base_px)

    @property
    def config(self) -> ThemeConfig:
        return self._config

    @property
    def base_font_size_px(self) -> float:
        return self._base_px

    @property
    def base_line_height_px(self) -> float:
        return self._line_px

    def to_px(self, length: str | float | Length, context: Any = None) -> float:
        """Resolve a length to pixels against this theme's base font size."""
        context_px = None if context is None else self.to_px(context)
        return to_px(parse_length(length), self._base_px, context_px)

    def rhythm(
        self,
        lines: float = 1,
        font_size: str | float | Length | None = None,
        offset: str | float | Length = 0,
    ) -> Length:
        """Return a vertical spacing of ``lines`` base line heights.

        Args:
            lines: Multiple of the base line height.
            font_size: Font size of the element the spacing applies to; only
                matters when the rhythm unit is ``em``.
            offset: Length subtracted from the result (e.g. a border width).

        Returns:
            Length in the theme's rhythm unit.
        """
        length_px = lines * self._line_px - self.to_px(offset)
        context_px = None if font_size is None else self.to_px(font_size)
        return convert_length(
            Length(length_px, "px"), self._config.rhythm_unit, self._base_px, context_px
        )

    def lines_for_font_size(self, font_size_px: float) -> float:
        """Number of base lines needed to fit text of the given size.

        Rounds up to whole (or half) lines and adds another step when the
        leftover space would be less than the minimum line padding.
        """
        half = self._config.round_to_nearest_half_line
        if half:
            lines = math.ceil(2 * font_size_px / self._line_px) / 2
        else:
            lines = math.ceil(font_size_px / self._line_px)
        if lines * self._line_px - font_size_px < self._min_padding_px * 2:
            lines += 0.5 if half else 1
        return lines

    def adjust_font_size_to(
        self,
        to_size: str | float | Length,
        lines: float | str = "auto",
        from_size: str | float | Length | None = None,
    ) -> ScaledSize:
        """Size text to ``to_size`` while keeping its line height on the rhythm.

        Args:
            to_size: Target font size; percentages are of the base font size.
            lines: Number of lines for the line height, or ``"auto"``.
            from_size: Font size of the parent element.

        Returns:
            ScaledSize in the rhythm unit.
        """
        from_px = self._base_px if from_size is None else self.to_px(from_size)
        size = parse_length(to_size)
        if size.unit == "%":
            size_px = self._base_px * size.value / 100
        else:
            size_px = to_px(size, self._base_px, from_px)
        if lines == "auto":
            lines = self.lines_for_font_size(size_px)
        font_size = convert_length(
            Length(size_px, "px"), self._config.rhythm_unit, self._base_px, from_px
        )
        return ScaledSize(font_size, self.rhythm(lines, Length(from_px, "px")))

    def scale(self, step: float = 0) -> ScaledSize:
        """Return the font size and line height ``step`` steps up the scale.

        Step 0 is the base font size; negative steps scale down.

        Raises:
            ValueError: If the step is too large to produce a finite size.
        """
        size_px = modular_scale(step, self._ratio) * self._base_px
        if not math.isfinite(size_px):
            raise ValueError(f"Scale step {step!r} is out of range")
        return self.adjust_font_size_to(Length(size_px, "px"))

    def establish_baseline(self) -> dict[str, str]:
        """Return the root font-size and line-height declarations."""
        return {
            "font-size": f"{css_value(self._base_px / 16 * 100)}%",
            "line-height": css_value(self._line_px / self._base_px),
        }

    def styles(self) -> dict[str, dict[str, Any]]:
        """Return the full selector table.

        Generated styles come first, then the theme's own ``override_styles``
        and finally the config's override table; later entries win per
        property.
        """
        theme_styles: StyleTable = {}
        if self._config.override_styles is not None:
            theme_styles = self._config.override_styles(self)
        return merge_style_tables(create_styles(self), theme_styles, self._config.overrides)

    def to_json(self) -> dict[str, dict[str, str]]:
        """Return the selector table with every value rendered to a string."""
        return {
            selector: {prop: css_value(value) for prop, value in declarations.items()}
            for selector, declarations in self.styles().items()
        }

    def to_css(self) -> str:
        return compile_styles(self.styles(), normalize=self._config.include_normalize)

    def __str__(self) -> str:
        return self.to_css()

    def google_fonts_url(self) -> str | None:
        """Return the Google Fonts stylesheet URL for the theme's web fonts."""
        fonts = self._config.google_fonts
        if not fonts:
            return None
        families = "|".join(
            quote_plus(font.name) + (":" + ",".join(font.styles) if font.styles else "")
            for font in fonts
        )
        return f"https://fonts.googleapis.com/css?family={families}"


def create_typography_engine(config: ThemeConfig) -> TypographyEngine:
    """Build a TypographyEngine from a validated ThemeConfig."""
    return TypographyEngine(config)
