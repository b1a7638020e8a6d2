"""Reading numeric settings from environment variables."""

from __future__ import annotations

import os
import re

from .errors import OtherError

_U16_MAX = 0xFFFF
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


def get_env_var_as_u16(var_name: str) -> int:
    """Return the environment variable ``var_name`` as a 16-bit unsigned integer.

    Raises OtherError when the variable is unset or is not such an integer.
    """
    value = os.environ.get(var_name)
    if value is None:
        raise OtherError(f"Environment variable {var_name} is not set")
    if not _UNSIGNED.fullmatch(value):
        raise OtherError(
            f"Could not convert environment variable {var_name} to u16: invalid digit"
        )
    number = int(value)
    if number > _U16_MAX:
        raise OtherError(
            f"Could not convert environment variable {var_name} to u16: "
            "number too large to fit in target type"
        )
    return number