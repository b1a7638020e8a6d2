"""Geometry, identifiers and pixel records exchanged between client and server."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Any, Mapping

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_F32_PAIR = struct.Struct(">ff")


def _to_f32(value: float) -> float:
    """Round a float to single precision, saturating to infinity."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _field(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field {key!r}") from exc


def _float_field(data: Mapping[str, Any], key: str) -> float:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number")
    return float(value)


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} must be an integer")
    return value


def _check_unsigned(name: str, value: int, limit: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer")
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be between 0 and {limit}")


@dataclass(frozen=True)
class Point:
    """A point in the plane."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Point:
        return cls(_float_field(data, "x"), _float_field(data, "y"))


@dataclass(frozen=True)
class Range:
    """A rectangle given by its minimum and maximum corners."""

    min: Point
    max: Point

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Range:
        return cls(Point.from_dict(_field(data, "min")), Point.from_dict(_field(data, "max")))


@dataclass(frozen=True)
class Resolution:
    """Pixel counts along x and y (16-bit unsigned)."""

    nx: int
    ny: int

    def __post_init__(self) -> None:
        _check_unsigned("nx", self.nx, _U16_MAX)
        _check_unsigned("ny", self.ny, _U16_MAX)

    def to_dict(self) -> dict[str, int]:
        return {"nx": self.nx, "ny": self.ny}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resolution:
        return cls(_int_field(data, "nx"), _int_field(data, "ny"))


@dataclass(frozen=True)
class U8Data:
    """A segment of a byte stream: start offset and length."""

    offset: int
    count: int

    def __post_init__(self) -> None:
        _check_unsigned("offset", self.offset, _U32_MAX)
        _check_unsigned("count", self.count, _U32_MAX)

    def to_dict(self) -> dict[str, int]:
        return {"offset": self.offset, "count": self.count}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> U8Data:
        return cls(_int_field(data, "offset"), _int_field(data, "count"))


@dataclass(frozen=True)
class PixelData:
    """Location of a run of pixels: start offset and pixel count."""

    offset: int
    count: int

    def __post_init__(self) -> None:
        _check_unsigned("offset", self.offset, _U32_MAX)
        _check_unsigned("count", self.count, _U32_MAX)

    def to_dict(self) -> dict[str, int]:
        return {"offset": self.offset, "count": self.count}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PixelData:
        return cls(_int_field(data, "offset"), _int_field(data, "count"))


@dataclass(frozen=True)
class PixelIntensity:
    """Final magnitude ``zn`` and normalised iteration ``count``, both single precision."""

    zn: float
    count: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "zn", _to_f32(float(self.zn)))
        object.__setattr__(self, "count", _to_f32(float(self.count)))

    def to_bytes(self) -> bytes:
        """Big-endian f32 ``zn`` followed by big-endian f32 ``count``."""
        return _F32_PAIR.pack(self.zn, self.count)


def pixel_intensities_from_bytes(data: bytes) -> list[PixelIntensity]:
    """Decode big-endian (zn, count) pairs.

    A pair is only decoded while at least twelve bytes remain from its start,
    so the final eight bytes of a stream never form a record of their own.
    """
    records = max(0, (len(data) - 4) // 8)
    return [
        PixelIntensity(zn, count)
        for zn, count in _F32_PAIR.iter_unpack(bytes(data[: records * 8]))
    ]