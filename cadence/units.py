"""CSS length handling for Cadence.

Typography math happens in pixels and is expressed in whatever unit the theme
asks for (usually ``rem``). This module provides the small value type used for
that and the conversions between units.

Key components:
    Length: Immutable number-plus-unit value.
    parse_length: Parse ``"18px"``, ``"1.5rem"`` or plain numbers.
    convert_length: Convert a length between px, rem, em and %.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

UNITS = ("px", "rem", "em", "%")

_LENGTH_RE = re.compile(r"^\s*(?P<value>[-+]?(?:\d+\.?\d*|\.\d+))\s*(?P<unit>px|rem|em|%)?\s*$")


def format_number(value: float) -> str:
    """Format a number the way it is written in CSS.

    At most five decimals are kept and trailing zeros are trimmed.

    Examples:
        >>> format_number(0.36250)
        '0.3625'

        >>> format_number(16.0)
        '16'
    """
    text = f"{value:.5f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


@total_ordering
@dataclass(frozen=True)
class Length:
    """A CSS length.

    Attributes:
        value: Numeric magnitude, kept at full precision.
        unit: One of ``px``, ``rem``, ``em`` or ``%``.
    """

    value: float
    unit: str = "px"

    def __post_init__(self):
        if self.unit not in UNITS:
            raise ValueError(f"Unsupported CSS unit: {self.unit!r}")

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"

    def __float__(self) -> float:
        return float(self.value)

    def __mul__(self, factor: float) -> Length:
        if isinstance(factor, (int, float)):
            return Length(self.value * factor, self.unit)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Length:
        if isinstance(divisor, (int, float)):
            return Length(self.value / divisor, self.unit)
        return NotImplemented

    def __lt__(self, other: Length) -> bool:
        if not isinstance(other, Length):
            return NotImplemented
        if other.unit != self.unit:
            raise TypeError(f"Cannot compare {self.unit} with {other.unit}")
        return self.value < other.value


def parse_length(value: str | float | Length, default_unit: str = "px") -> Length:
    """Parse a CSS length.

    Args:
        value: A ``Length``, a number (taken in ``default_unit``) or a string
            such as ``"18px"``.
        default_unit: Unit applied to bare numbers.

    Returns:
        Parsed Length.

    Raises:
        ValueError: If the value is not a recognisable length.
    """
    if isinstance(value, Length):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a CSS length: {value!r}")
    if isinstance(value, (int, float)):
        return Length(float(value), default_unit)
    match = _LENGTH_RE.match(str(value))
    if not match:
        raise ValueError(f"Not a CSS length: {value!r}")
    return Length(float(match.group("value")), match.group("unit") or default_unit)


def is_unitless(value: str | float | Length) -> bool:
    """Check whether a value is a bare number (e.g. a line-height multiplier)."""
    if isinstance(value, Length) or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    match = _LENGTH_RE.match(str(value))
    return bool(match) and match.group("unit") is None


def to_px(length: Length, base_font_size_px: float, context_px: float | None = None) -> float:
    """Resolve a length to pixels.

    Args:
        length: Length to resolve.
        base_font_size_px: Root font size, used for ``rem``.
        context_px: Font size of the surrounding element, used for ``em`` and
            ``%``. Defaults to the root font size.
    """
    context = base_font_size_px if context_px is None else context_px
    if length.unit == "px":
        return length.value
    if length.unit == "rem":
        return length.value * base_font_size_px
    if length.unit == "em":
        return length.value * context
    return length.value / 100 * context


def convert_length(
    length: str | float | Length,
    to_unit: str,
    base_font_size_px: float,
    context_px: float | None = None,
) -> Length:
    """Convert a length to another unit.

    Args:
        length: Source length (bare numbers are pixels).
        to_unit: Target unit.
        base_font_size_px: Root font size in pixels.
        context_px: Font size of the element the result applies to.

    Returns:
        Converted Length.
    """
    source = parse_length(length)
    if to_unit not in UNITS:
        raise ValueError(f"Unsupported CSS unit: {to_unit!r}")
    if source.unit == to_unit:
        return source
    context = base_font_size_px if context_px is None else context_px
    px = to_px(source, base_font_size_px, context)
    if to_unit == "px":
        return Length(px, "px")
    if to_unit == "rem":
        return Length(px / base_font_size_px, "rem")
    if to_unit == "em":
        return Length(px / context, "em")
    return Length(px / context * 100, "%")
