"""Modular scale for Cadence.

A modular scale is a geometric progression of sizes: step ``n`` is
``ratio ** n`` times the base size. Ratios can be given as numbers or by their
musical-interval names.
"""

from __future__ import annotations

import math

RATIOS: dict[str, float] = {
    "minor second": 16 / 15,
    "major second": 9 / 8,
    "minor third": 6 / 5,
    "major third": 5 / 4,
    "diminished fourth": math.sqrt(2),
    "perfect fourth": 4 / 3,
    "augmented fourth": math.sqrt(2),
    "perfect fifth": 3 / 2,
    "minor sixth": 8 / 5,
    "golden": 1.61803398875,
    "phi": 1.61803398875,
    "major sixth": 5 / 3,
    "minor seventh": 16 / 9,
    "major seventh": 15 / 8,
    "octave": 2,
    "major tenth": 5 / 2,
    "major eleventh": 8 / 3,
    "major twelfth": 3,
    "double octave": 4,
}


def resolve_ratio(ratio: float | str) -> float:
    """Resolve a scale ratio to a number.

    Args:
        ratio: A number greater than one or a name from ``RATIOS``
            (case-insensitive, hyphens allowed in place of spaces).

    Returns:
        The ratio as a float.

    Raises:
        ValueError: For unknown names and ratios that would not grow.
    """
    if isinstance(ratio, bool):
        raise ValueError(f"Invalid scale ratio: {ratio!r}")
    if isinstance(ratio, str):
        key = ratio.strip().lower().replace("-", " ").replace("_", " ")
        if key in RATIOS:
            return float(RATIOS[key])
        try:
            value = float(key)
        except ValueError:
            raise ValueError(f"Unknown scale ratio: {ratio!r}") from None
    elif isinstance(ratio, (int, float)):
        value = float(ratio)
    else:
        raise ValueError(f"Invalid scale ratio: {ratio!r}")
    if not value > 1:
        raise ValueError(f"Scale ratio must be greater than 1, got {ratio!r}")
    return value


def modular_scale(step: float, ratio: float | str = "golden") -> float:
    """Return the multiplier for ``step`` on the scale.

    Examples:
        >>> modular_scale(0, 1.25)
        1.0

        >>> modular_scale(2, "octave")
        4.0

    Raises:
        ValueError: For an invalid ratio, or a step too large to represent.
    """
    value = resolve_ratio(ratio)
    try:
        return value ** step
    except OverflowError:
        raise ValueError(f"Scale step {step!r} is out of range") from None
