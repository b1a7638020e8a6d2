"""Directory, file-extension and output-path helpers."""

from __future__ import annotations

import os
import random
from enum import Enum, auto
from pathlib import Path

from .errors import FractalIOError


class DirType(Enum):
    """Kinds of directory the application works in."""

    CURRENT = auto()
    WORKSPACE = auto()


class FileType(Enum):
    """Kinds of file-system entry."""

    FILE = auto()
    DIRECTORY = auto()


class FileExtension(Enum):
    """Supported image file extensions."""

    PNG = "png"
    JPG = "jpg"
    JPEG = "jpeg"


def get_workspace_dir() -> Path:
    """Return the workspace directory, which is the current working directory."""
    return Path.cwd()


def get_dir_path(debug_mode: bool = False) -> Path:
    """Return the output directory.

    Outside debug mode this is the current working directory; in debug mode
    it is the ``target`` directory inside the workspace.
    """
    try:
        workspace = get_workspace_dir()
    except OSError as exc:
        raise FractalIOError(exc) from exc
    return workspace / "target" if debug_mode else workspace


def get_extension_str(extension: FileExtension) -> str:
    """Return the file extension text for ``extension``."""
    return extension.value


def get_file_path(filename: str, path: str | os.PathLike[str], extension: str) -> str:
    """Build ``<path>/<filename>-<random 32-bit number>.<extension>``."""
    name = f"{filename}-{random.getrandbits(32)}.{extension}"
    return str(Path(path) / name)


def dir_exists(path: str | os.PathLike[str]) -> bool:
    """Return whether anything exists at ``path``."""
    return Path(path).exists()