"""Rendering fractal fragments to images, saving and viewing them."""

from __future__ import annotations

import logging
import os
import subprocess
import sys

from PIL import Image

from .colors import color
from .complex import Complex
from .env import get_env_var_as_u16
from .errors import ImageError
from .filesystem import dir_exists
from .messages import FragmentTask
from .models import PixelIntensity

logger = logging.getLogger(__name__)


def generate_fractal_set(
    fragment_task: FragmentTask,
) -> tuple[Image.Image, bytes, list[PixelIntensity]]:
    """Render a fragment task.

    Returns the RGB image, its raw RGB bytes in row-major order and the
    pixel intensities in the same order.
    """
    descriptor = fragment_task.fractal
    resolution = fragment_task.resolution
    area = fragment_task.range
    nx, ny = resolution.nx, resolution.ny

    scale_x = (area.max.x - area.min.x) / nx if nx else 0.0
    scale_y = (area.max.y - area.min.y) / ny if ny else 0.0

    logger.info("Generating fractal set...")
    intensities: list[PixelIntensity] = []
    colors: list[tuple[int, int, int]] = []
    for y in range(ny):
        scaled_y = y * scale_y + area.min.y
        for x in range(nx):
            point = Complex(x * scale_x + area.min.x, scaled_y)
            intensity = descriptor.compute_pixel_intensity(point, fragment_task.max_iteration)
            intensities.append(intensity)
            colors.append(color(intensity))

    img = Image.new("RGB", (nx, ny))
    img.putdata(colors)
    pixel_bytes = bytes(channel for rgb in colors for channel in rgb)
    return img, pixel_bytes, intensities


def image_from_pixel_intensity(pixel_intensity: list[PixelIntensity]) -> Image.Image:
    """Colour intensities row by row into an image sized by RESOLUTION_WIDTH/HEIGHT."""
    width = get_env_var_as_u16("RESOLUTION_WIDTH")
    height = get_env_var_as_u16("RESOLUTION_HEIGHT")
    if pixel_intensity and width == 0:
        raise ImageError("image width is zero")

    img = Image.new("RGB", (width, height))
    for i, intensity in enumerate(pixel_intensity):
        y, x = divmod(i, width)
        if y >= height:
            raise ImageError(
                f"pixel ({x}, {y}) is out of bounds for a {width}x{height} image"
            )
        img.putpixel((x, y), color(intensity))
    return img


def save_fractal_image(img: Image.Image, img_path: str | os.PathLike[str]) -> None:
    """Save ``img`` to ``img_path``, the format chosen by the extension."""
    try:
        img.save(img_path)
    except (OSError, ValueError, KeyError) as exc:
        raise ImageError(exc) from exc
    logger.info("Image saved successfully")
    logger.debug("Image path %s", img_path)


def open_image(path: str) -> None:
    """Open ``path`` with the system's default image viewer."""
    if not dir_exists(path):
        raise FileNotFoundError("Image file not found")

    platform = sys.platform
    if platform.startswith("win"):
        command = ["cmd", "/c", "start", path]
    elif platform.startswith("linux"):
        command = ["xdg-open", path]
    elif platform == "darwin":
        command = ["open", path]
    else:
        raise OSError("OS not supported")
    subprocess.Popen(command)