"""Messages exchanged between workers and the server, with their JSON encoding."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Union

from .errors import SerializationError
from .fractals import FractalOperations, fractal_from_dict, fractal_to_dict
from .models import (
    PixelData,
    Range,
    Resolution,
    U8Data,
    _check_unsigned,
    _field,
    _int_field,
)

logger = logging.getLogger(__name__)

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF


def _plain(value: Any) -> Any:
    """Prepare a value for JSON: non-finite floats become null."""
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _encode(tag: str, payload: Mapping[str, Any]) -> str:
    try:
        return json.dumps(
            _plain({tag: payload}),
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc


def _parse(message: str) -> Any:
    try:
        return json.loads(message)
    except (json.JSONDecodeError, TypeError) as exc:
        raise SerializationError(str(exc)) from exc


def _decode(tag: str, message: str) -> Mapping[str, Any]:
    logger.debug("Deserializing message: %s", message)
    value = _parse(message)
    body = value.get(tag) if isinstance(value, dict) else None
    if not isinstance(body, dict):
        logger.error("Invalid format: %s object not found", tag)
        raise SerializationError("Invalid format")
    return body


def _string_field(data: Mapping[str, Any], key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


@dataclass(frozen=True)
class FragmentRequest:
    """A worker asking for work, with the most pixels it can handle."""

    worker_name: str
    maximal_work_load: int

    def __post_init__(self) -> None:
        _check_unsigned("maximal_work_load", self.maximal_work_load, _U32_MAX)

    def to_dict(self) -> dict[str, Any]:
        return {"worker_name": self.worker_name, "maximal_work_load": self.maximal_work_load}

    def serialize(self) -> str:
        """Encode as ``{"FragmentRequest": {...}}``."""
        return _encode("FragmentRequest", self.to_dict())

    @classmethod
    def deserialize(cls, message: str) -> FragmentRequest:
        body = _decode("FragmentRequest", message)
        try:
            return cls(_string_field(body, "worker_name"), _int_field(body, "maximal_work_load"))
        except (ValueError, TypeError) as exc:
            raise SerializationError(str(exc)) from exc


@dataclass(frozen=True)
class FragmentTask:
    """Work handed to a worker: which fractal to compute, where and how finely."""

    id: U8Data
    fractal: FractalOperations
    max_iteration: int
    resolution: Resolution
    range: Range

    def __post_init__(self) -> None:
        _check_unsigned("max_iteration", self.max_iteration, _U16_MAX)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.to_dict(),
            "fractal": fractal_to_dict(self.fractal),
            "max_iteration": self.max_iteration,
            "resolution": self.resolution.to_dict(),
            "range": self.range.to_dict(),
        }

    def serialize(self) -> str:
        """Encode as ``{"FragmentTask": {...}}``."""
        try:
            payload = self.to_dict()
        except ValueError as exc:
            raise SerializationError(str(exc)) from exc
        return _encode("FragmentTask", payload)

    @classmethod
    def deserialize(cls, message: str) -> FragmentTask:
        body = _decode("FragmentTask", message)
        try:
            return cls(
                id=U8Data.from_dict(_field(body, "id")),
                fractal=fractal_from_dict(_field(body, "fractal")),
                max_iteration=_int_field(body, "max_iteration"),
                resolution=Resolution.from_dict(_field(body, "resolution")),
                range=Range.from_dict(_field(body, "range")),
            )
        except (ValueError, TypeError) as exc:
            raise SerializationError(str(exc)) from exc


@dataclass(frozen=True)
class FragmentResult:
    """A worker's answer to a task: the task's geometry and where its pixels lie."""

    id: U8Data
    resolution: Resolution
    range: Range
    pixels: PixelData

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.to_dict(),
            "resolution": self.resolution.to_dict(),
            "range": self.range.to_dict(),
            "pixels": self.pixels.to_dict(),
        }

    def serialize(self) -> str:
        """Encode as ``{"FragmentResult": {...}}``."""
        serialized = _encode("FragmentResult", self.to_dict())
        logger.debug("Serialized message: %s", serialized)
        return serialized

    @classmethod
    def deserialize(cls, message: str) -> FragmentResult:
        body = _decode("FragmentResult", message)
        try:
            return cls(
                id=U8Data.from_dict(_field(body, "id")),
                resolution=Resolution.from_dict(_field(body, "resolution")),
                range=Range.from_dict(_field(body, "range")),
                pixels=PixelData.from_dict(_field(body, "pixels")),
            )
        except (ValueError, TypeError) as exc:
            raise SerializationError(str(exc)) from exc


Message = Union[FragmentRequest, FragmentTask, FragmentResult]


def deserialize_message(response: str) -> Message:
    """Decode a message the server accepts: a request or a result.

    The message kind is read from the first key of the top-level object in
    sorted order.
    """
    value = _parse(response)
    logger.debug("Response value: %r", value)
    key = min(value) if isinstance(value, dict) and value else None
    if key == "FragmentRequest":
        logger.debug("Deserializing FragmentRequest")
        return FragmentRequest.deserialize(response)
    if key == "FragmentResult":
        logger.debug("Deserializing FragmentResult")
        return FragmentResult.deserialize(response)
    raise SerializationError("No recognizable message type found")