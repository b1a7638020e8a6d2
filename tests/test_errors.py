import pytest

from frakt.errors import (
    FractalConnectionError,
    FractalError,
    FractalIOError,
    ImageError,
    NotFoundError,
    OtherError,
    PathConversionError,
    SerializationError,
    TaskNotSetError,
    UnsupportedOperationError,
)


@pytest.mark.parametrize(
    ("cls", "prefix"),
    [
        (FractalIOError, "IO error"),
        (ImageError, "Image error"),
        (PathConversionError, "Path conversion error"),
        (SerializationError, "Serialization error"),
        (NotFoundError, "Not found"),
        (UnsupportedOperationError, "Unsupported operation"),
        (TaskNotSetError, "Task not set"),
        (FractalConnectionError, "Connection error"),
        (OtherError, "An error occurred"),
    ],
)
def test_display_prefix(cls, prefix):
    err = cls("boom")
    assert str(err) == f"{prefix}: boom"


@pytest.mark.parametrize(
    "cls",
    [
        FractalIOError,
        ImageError,
        PathConversionError,
        SerializationError,
        NotFoundError,
        UnsupportedOperationError,
        TaskNotSetError,
        FractalConnectionError,
        OtherError,
    ],
)
def test_all_are_fractal_errors(cls):
    err = cls("detail")
    assert issubclass(cls, FractalError) is True
    assert err.message == "detail"
    assert str(err).endswith(": detail")


def test_io_error_wraps_os_error_text():
    cause = OSError("disk gone")
    err = FractalIOError(cause)
    assert str(err) == f"IO error: {cause}"
    assert err.message is cause


def test_connection_error_message():
    err = FractalConnectionError("Unable to resolve address")
    assert str(err) == "Connection error: Unable to resolve address"


def test_other_error_not_a_connection_error():
    err = OtherError("x")
    assert isinstance(err, FractalConnectionError) is False
    assert str(err) == "An error occurred: x"