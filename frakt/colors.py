"""Colour types and the mapping from pixel intensity to RGB."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .models import PixelIntensity, _to_f32

_PI_APPROX = _to_f32(3.14)


def _as_u8(value: float) -> int:
    """Saturating float to unsigned byte conversion (NaN becomes 0)."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


def _cos(x: float) -> float:
    return math.nan if math.isinf(x) else math.cos(x)


def _fmod(x: float, y: float) -> float:
    return math.nan if math.isinf(x) else math.fmod(x, y)


@dataclass(frozen=True)
class RGB:
    """Red, green and blue channels, each 0 to 255."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class HSL:
    """Hue in degrees, saturation and lightness in 0..1."""

    h: float
    s: float
    l: float  # noqa: E741


def color(pixel_intensity: PixelIntensity) -> tuple[int, int, int]:
    """Map a pixel intensity to an RGB triple; points that never escaped are black."""
    if pixel_intensity.count == 1.0:
        return (0, 0, 0)

    f = _to_f32
    hsl = HSL(
        h=f(pixel_intensity.count * 360.0),
        s=f(0.5 + f(0.5 * f(_cos(f(pixel_intensity.zn * _PI_APPROX))))),
        l=0.5,
    )
    rgb = hsl_to_rgb(hsl)
    return (rgb.r, rgb.g, rgb.b)


def hsl_to_rgb(hsl: HSL) -> RGB:
    """Convert HSL to RGB in single precision, truncating each channel."""
    f = _to_f32
    c = f(f(1.0 - abs(f(f(2.0 * hsl.l) - 1.0))) * hsl.s)
    h_prime = f(hsl.h / 60.0)
    x = f(c * f(1.0 - abs(f(f(_fmod(h_prime, 2.0)) - 1.0))))
    m = f(hsl.l - f(c / 2.0))

    sector = _as_u8(h_prime)
    if sector == 0:
        r_temp, g_temp, b_temp = c, x, 0.0
    elif sector == 1:
        r_temp, g_temp, b_temp = x, c, 0.0
    elif sector == 2:
        r_temp, g_temp, b_temp = 0.0, c, x
    elif sector == 3:
        r_temp, g_temp, b_temp = 0.0, x, c
    elif sector == 4:
        r_temp, g_temp, b_temp = x, 0.0, c
    else:
        r_temp, g_temp, b_temp = c, 0.0, x

    return RGB(
        r=_as_u8(f(f(r_temp + m) * 255.0)),
        g=_as_u8(f(f(g_temp + m) * 255.0)),
        b=_as_u8(f(f(b_temp + m) * 255.0)),
    )