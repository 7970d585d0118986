"""
Input sanitizing for the Wrapper setters.

The lenient setters never raise. Each helper here returns the value to store
together with a ``discarded`` flag that is True when the caller's input was
ignored in favour of a fallback, so the Wrapper can log it.
"""

import math
import os
from typing import Any, List, Optional, Tuple, Union

AUTO = "auto"


def escape_shell_arg(value: str) -> str:
    """Quote ``value`` as a single POSIX shell token (single quotes, each
    embedded quote closed, escaped and reopened)."""
    return "'" + value.replace("'", "'\\''") + "'"


def is_executable_file(path: Any) -> bool:
    if not isinstance(path, (str, os.PathLike)) or not str(path):
        return False
    return os.path.isfile(path) and os.access(path, os.X_OK)


def is_writable_directory(path: Any) -> bool:
    if not isinstance(path, (str, os.PathLike)) or not str(path):
        return False
    return os.path.isdir(path) and os.access(path, os.W_OK)


def _as_number(value: Any) -> Optional[Union[int, float]]:
    # bool is an int subclass but never a count
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def coerce_flag(value: Any) -> Tuple[bool, bool]:
    """Only genuine booleans and integers count, everything else is False."""
    if isinstance(value, (bool, int)):
        return bool(value), False
    return False, True


def coerce_max_parallelism(value: Any, default: int) -> Tuple[int, bool]:
    if value == AUTO:
        return 0, False
    number = _as_number(value)
    if number is None or number <= -1:
        return default, True
    return int(number), False


def coerce_parallelism(value: Any) -> Tuple[int, bool]:
    if value in (AUTO, "0") or (not isinstance(value, bool) and value == 0):
        return 0, False
    number = _as_number(value)
    if number is None or number <= 0:
        return 0, True
    return int(number), False


def collect_strings(value: Any) -> Tuple[List[str], bool]:
    """Flatten a string or a list/tuple of strings.

    Returns the accepted strings and whether anything in the input was
    dropped. Non-string items inside a sequence are skipped.
    """
    if not value:
        return [], True
    if isinstance(value, str):
        return [value], False
    if isinstance(value, (list, tuple)):
        accepted = [item for item in value if isinstance(item, str)]
        return accepted, len(accepted) != len(value)
    return [], True
