"""Complex number type used by the fractal computations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _sin(x: float) -> float:
    return math.nan if math.isinf(x) else math.sin(x)


def _cos(x: float) -> float:
    return math.nan if math.isinf(x) else math.cos(x)


def _div(a: float, b: float) -> float:
    """Divide with IEEE semantics instead of raising on a zero divisor."""
    try:
        return a / b
    except ZeroDivisionError:
        if math.isnan(a) or a == 0.0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _as_float(data: Mapping[str, Any], key: str) -> float:
    try:
        value = data[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field {key!r}") from exc
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number")
    return float(value)


@dataclass(frozen=True)
class Complex:
    """A complex number with real part ``re`` and imaginary part ``im``."""

    re: float
    im: float

    def __add__(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other: Complex) -> Complex:
        return Complex(self.re - other.re, self.im - other.im)

    def __mul__(self, other: Complex) -> Complex:
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def __truediv__(self, other: Complex) -> Complex:
        denominator = other.magnitude_squared()
        return Complex(
            _div(self.re * other.re + self.im * other.im, denominator),
            _div(self.im * other.re - self.re * other.im, denominator),
        )

    def __abs__(self) -> float:
        return self.norm()

    def square(self) -> Complex:
        return self * self

    def magnitude_squared(self) -> float:
        return self.re * self.re + self.im * self.im

    def norm(self) -> float:
        return math.sqrt(self.magnitude_squared())

    def sin(self) -> Complex:
        """sin(a+ib) = sin(a)cosh(b) + i cos(a)sinh(b)."""
        return Complex(
            _sin(self.re) * _cosh(self.im),
            _cos(self.re) * _sinh(self.im),
        )

    def exp(self) -> Complex:
        """exp(a+ib) = exp(a) * (cos(b) + i sin(b))."""
        exp_re = Complex(_exp(self.re), 0.0)
        exp_im = Complex(_cos(self.im), _sin(self.im))
        return exp_re * exp_im

    def arg(self) -> float:
        """Argument in radians."""
        return math.atan2(self.im, self.re)

    def to_dict(self) -> dict[str, float]:
        return {"re": self.re, "im": self.im}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Complex:
        return cls(_as_float(data, "re"), _as_float(data, "im"))