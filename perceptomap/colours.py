"""Colour maps that turn a normalised intensity into an RGB triple."""

from __future__ import annotations

import math
from enum import Enum

RGB = tuple[int, int, int]


class ColourScheme(Enum):
    """Colour maps offered for the spectrogram display."""

    CLASSIC = 1
    MAGMA = 2
    GRAYSCALE = 3


_MAGMA: tuple[RGB, ...] = (
    (0, 0, 4),
    (24, 15, 61),
    (68, 15, 118),
    (114, 31, 129),
    (158, 47, 127),
    (205, 64, 113),
    (241, 96, 93),
    (253, 150, 104),
    (254, 202, 141),
    (252, 253, 191),
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def hsv_to_rgb(hue: float, saturation: float, value: float) -> RGB:
    """Convert HSV (each in 0..1, hue wrapping) to 8-bit RGB."""
    v = _clamp(value * 255.0, 0.0, 255.0)
    grey = round(v)
    if saturation <= 0:
        return (grey, grey, grey)

    s = min(1.0, saturation)
    h = (hue - math.floor(hue)) * 360.0 / 60.0
    f = h - math.floor(h)
    low = round(v * (1.0 - s))
    rising = round(v * (1.0 - s * (1.0 - f)))
    falling = round(v * (1.0 - s * f))

    if h < 1.0:
        return (grey, rising, low)
    if h < 2.0:
        return (falling, grey, low)
    if h < 3.0:
        return (low, grey, rising)
    if h < 4.0:
        return (low, falling, grey)
    if h < 5.0:
        return (rising, low, grey)
    return (grey, low, falling)


def _interpolate(first: RGB, second: RGB, proportion: float) -> RGB:
    if proportion <= 0.0:
        return first
    if proportion >= 1.0:
        return second
    return tuple(round(a + (b - a) * proportion) for a, b in zip(first, second))  # type: ignore[return-value]


def _magma(value: float) -> RGB:
    scaled = value * (len(_MAGMA) - 1)
    low = math.floor(scaled)
    high = min(low + 1, len(_MAGMA) - 1)
    return _interpolate(_MAGMA[low], _MAGMA[high], scaled - low)


def colour_for_value(value: float, scheme: ColourScheme = ColourScheme.CLASSIC) -> RGB:
    """Map an intensity in 0..1 (clamped) to a colour in the given scheme."""
    value = _clamp(float(value), 0.0, 1.0)

    if scheme is ColourScheme.CLASSIC:
        return hsv_to_rgb(value, 1.0, value)
    if scheme is ColourScheme.GRAYSCALE:
        level = round(value * 255.0)
        return (level, level, level)
    if scheme is ColourScheme.MAGMA:
        return _magma(value)
    return (0, 0, 0)