"""Exception hierarchy used across the fractal client and server."""

from __future__ import annotations


class FractalError(Exception):
    """Base class of every error raised by the package."""

    prefix = "An error occurred"

    def __init__(self, message: object = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class FractalIOError(FractalError):
    """An input/output operation failed."""

    prefix = "IO error"


class ImageError(FractalError):
    """Building, encoding or saving an image failed."""

    prefix = "Image error"


class PathConversionError(FractalError):
    """A path could not be turned into a string."""

    prefix = "Path conversion error"


class SerializationError(FractalError):
    """A message could not be serialized or deserialized."""

    prefix = "Serialization error"


class NotFoundError(FractalError):
    """A required item was not found."""

    prefix = "Not found"


class UnsupportedOperationError(FractalError):
    """The requested operation is not supported."""

    prefix = "Unsupported operation"


class TaskNotSetError(FractalError):
    """A required task was missing or unreadable."""

    prefix = "Task not set"


class FractalConnectionError(FractalError):
    """A network connection could not be made."""

    prefix = "Connection error"


class OtherError(FractalError):
    """Any other failure."""

    prefix = "An error occurred"