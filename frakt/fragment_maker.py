"""Splitting the image plane into fragment tasks for workers."""

from __future__ import annotations

import logging

from .complex import Complex
from .env import get_env_var_as_u16
from .fractals import IteratedSinZDescriptor
from .messages import FragmentResult, FragmentTask
from .models import Point, Range, Resolution, U8Data

logger = logging.getLogger(__name__)

_FULL_IMAGE = Range(Point(-3.0, -3.0), Point(3.0, 3.0))
_STEP = 2.0
_MAX_ITERATION = 64


def create_tasks() -> list[FragmentTask]:
    """Build one iterated-sine task per tile of the plane.

    The resolution of each task comes from RESOLUTION_WIDTH and
    RESOLUTION_HEIGHT; a missing or invalid variable raises OtherError.
    """
    width = get_env_var_as_u16("RESOLUTION_WIDTH")
    height = get_env_var_as_u16("RESOLUTION_HEIGHT")
    fractal = IteratedSinZDescriptor(c=Complex(0.2, 1.0))
    resolution = Resolution(nx=width, ny=height)
    return [
        FragmentTask(
            id=U8Data(offset=0, count=16),
            fractal=fractal,
            max_iteration=_MAX_ITERATION,
            resolution=resolution,
            range=tile,
        )
        for tile in generate_range(_FULL_IMAGE, _STEP)
    ]


def process_result(result: FragmentResult) -> None:
    """Accept a worker's result; nothing is done with it yet."""
    logger.debug("Result received: %r", result)


def generate_range(full_image: Range, step: float) -> list[Range]:
    """Cut ``full_image`` into square tiles of side ``step``, row by row.

    Tiles on the right and top edges are clipped to the image.
    """
    if not step > 0.0:
        raise ValueError("step must be positive")
    ranges: list[Range] = []
    y = full_image.min.y
    while y < full_image.max.y:
        x = full_image.min.x
        while x < full_image.max.x:
            ranges.append(
                Range(
                    Point(x, y),
                    Point(min(x + step, full_image.max.x), min(y + step, full_image.max.y)),
                )
            )
            x += step
        y += step
    return ranges