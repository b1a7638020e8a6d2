"""Fractal descriptors and the per-pixel escape-time computations."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping

from .complex import Complex
from .models import PixelIntensity

_ONE = Complex(1.0, 0.0)
_CONVERGENCE_EPSILON = 1e-6


def _ratio(iterations: int, max_iteration: int) -> float:
    """Iterations normalised by the maximum; 0/0 yields NaN as in IEEE arithmetic."""
    if max_iteration == 0:
        return math.nan
    return iterations / max_iteration


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object")
    return data


def _number(data: Mapping[str, Any], key: str) -> float:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number")
    return float(value)


def _complex(data: Mapping[str, Any], key: str) -> Complex:
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return Complex.from_dict(_mapping(data[key], f"field {key!r}"))


class FractalOperations(ABC):
    """A fractal that can compute the intensity of a single complex point."""

    @abstractmethod
    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        """Iterate from ``complex_point`` at most ``max_iteration`` times."""

    def _payload(self) -> dict[str, Any]:
        return {}

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> FractalOperations:
        return cls()


@dataclass(frozen=True)
class JuliaDescriptor(FractalOperations):
    """Julia set z -> z^2 + c."""

    c: Complex
    divergence_threshold_square: float

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        z, i = complex_point, 0
        while z.magnitude_squared() < self.divergence_threshold_square and i < max_iteration:
            z = z.square() + self.c
            i += 1
        return PixelIntensity(zn=z.norm(), count=_ratio(i, max_iteration))

    def _payload(self) -> dict[str, Any]:
        return {
            "c": self.c.to_dict(),
            "divergence_threshold_square": self.divergence_threshold_square,
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> JuliaDescriptor:
        return cls(_complex(payload, "c"), _number(payload, "divergence_threshold_square"))


@dataclass(frozen=True)
class IteratedSinZDescriptor(FractalOperations):
    """Iterated sine z -> sin(z) * c."""

    c: Complex

    def max_iteration(self) -> int:
        return 50

    def eta(self) -> float:
        """Divergence threshold on the squared magnitude."""
        return 50.0

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        eta = self.eta()
        z, iterations = complex_point, 0
        while z.magnitude_squared() < eta and iterations < max_iteration:
            z = z.sin() * self.c
            iterations += 1
        return PixelIntensity(
            zn=z.magnitude_squared() / eta,
            count=_ratio(iterations, max_iteration),
        )

    def _payload(self) -> dict[str, Any]:
        return {"c": self.c.to_dict()}

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> IteratedSinZDescriptor:
        return cls(_complex(payload, "c"))


@dataclass(frozen=True)
class MandelbrotDescriptor(FractalOperations):
    """Mandelbrot set z -> z^2 + point, starting from zero."""

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        z, i = Complex(0.0, 0.0), 0
        while z.magnitude_squared() <= 4.0 and i < max_iteration:
            z = z.square() + complex_point
            i += 1
        return PixelIntensity(zn=z.magnitude_squared() / 4.0, count=_ratio(i, max_iteration))


def _newton_intensity(complex_point: Complex, max_iteration: int, degree: int) -> PixelIntensity:
    z, iterations = complex_point, 0
    while iterations < max_iteration:
        next_z = newton_raphson_step(z, degree)
        if (next_z - z).magnitude_squared() < _CONVERGENCE_EPSILON:
            break
        z = next_z
        iterations += 1
    return PixelIntensity(
        zn=0.5 + z.arg() / (2.0 * math.pi),
        count=_ratio(iterations, max_iteration),
    )


@dataclass(frozen=True)
class NewtonRaphsonZ3Descriptor(FractalOperations):
    """Newton-Raphson iteration for z^3 - 1."""

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        return _newton_intensity(complex_point, max_iteration, 3)


@dataclass(frozen=True)
class NewtonRaphsonZ4Descriptor(FractalOperations):
    """Newton-Raphson iteration for z^4 - 1."""

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        return _newton_intensity(complex_point, max_iteration, 4)


@dataclass(frozen=True)
class BurningShipDescriptor(FractalOperations):
    """Burning Ship fractal; ``c`` is carried but the iteration starts from zero."""

    c: Complex
    divergence_threshold_square: float

    def compute_pixel_intensity(self, complex_point: Complex, max_iteration: int) -> PixelIntensity:
        x = y = 0.0
        iterations = 0
        while x * x + y * y < self.divergence_threshold_square and iterations < max_iteration:
            x, y = x * x - y * y + complex_point.re, 2.0 * abs(x * y) + complex_point.im
            iterations += 1
        return PixelIntensity(zn=x * x + y * y, count=_ratio(iterations, max_iteration))

    def _payload(self) -> dict[str, Any]:
        return {
            "c": self.c.to_dict(),
            "divergence_threshold_square": self.divergence_threshold_square,
        }

    @classmethod
    def _from_payload(cls, payload: Mapping[str, Any]) -> BurningShipDescriptor:
        return cls(_complex(payload, "c"), _number(payload, "divergence_threshold_square"))


def newton_raphson_step(z: Complex, degree: int) -> Complex:
    """One Newton-Raphson step for z^degree - 1; only degrees 3 and 4 are supported."""
    if degree == 3:
        pz = z.square() * z - _ONE
        dpz = z.square() * Complex(3.0, 0.0)
    elif degree == 4:
        pz = z.square().square() - _ONE
        dpz = z.square() * z * Complex(4.0, 0.0)
    else:
        raise ValueError("Degree must be 3 or 4")
    return z - pz / dpz


_VARIANTS: dict[str, type[FractalOperations]] = {
    "Julia": JuliaDescriptor,
    "IteratedSinZ": IteratedSinZDescriptor,
    "Mandelbrot": MandelbrotDescriptor,
    "NewtonRaphsonZ3": NewtonRaphsonZ3Descriptor,
    "NewtonRaphsonZ4": NewtonRaphsonZ4Descriptor,
    "BurningShip": BurningShipDescriptor,
}
_NAMES = {cls: name for name, cls in _VARIANTS.items()}


def fractal_to_dict(descriptor: FractalOperations) -> dict[str, Any]:
    """Encode a descriptor as a single-key object tagged with its variant name."""
    try:
        name = _NAMES[type(descriptor)]
    except KeyError as exc:
        raise ValueError(f"unknown fractal descriptor {type(descriptor).__name__}") from exc
    return {name: descriptor._payload()}


def fractal_from_dict(data: Any) -> FractalOperations:
    """Decode an object tagged with a variant name back into a descriptor."""
    mapping = _mapping(data, "fractal")
    for name, value in mapping.items():
        variant = _VARIANTS.get(name)
        if variant is not None:
            return variant._from_payload(_mapping(value, f"fractal {name!r}"))
    raise ValueError("No recognizable fractal type found")