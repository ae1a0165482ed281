"""Text formatting of real numbers in emitted angle expressions."""

from __future__ import annotations

import numpy as np

DEFAULT_ANGLE_PREFIX = "0.5*"


def format_real(value: float) -> str:
    """Shortest round-trippable positional decimal, e.g. ``2.0`` or ``-0.25``.

    Never uses scientific notation and always keeps at least one digit
    after the decimal point.
    """
    return np.format_float_positional(np.float64(value), unique=True, trim="0")


def angle_prefix(multiplier: float | None) -> str:
    """Return the scale factor written in front of every rotation angle."""
    if multiplier is None:
        return DEFAULT_ANGLE_PREFIX
    return f"{format_real(multiplier)}*"
