import os
from typing import Iterable

import psutil


def is_iterable(obj) -> bool:
    """
    Check if the object is iterable (excluding strings and bytes).

    Args:
        obj: The object to check.

    Returns:
        bool: True if the object is iterable, False otherwise.
    """
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, bytearray, memoryview))

def is_decimal_digits(s: str) -> bool:
    """
    Check that a string is a non-empty run of ASCII digits.

    `str.isdigit` alone accepts characters such as superscripts, and `int()`
    accepts signs, whitespace and underscores; none of those are valid in a
    connection string number.
    """
    return bool(s) and s.isascii() and s.isdigit()

def physical_cpu_count() -> int:
    """
    Number of physical cores, falling back to logical cores when psutil
    cannot determine it on this platform.
    """
    return psutil.cpu_count(logical=False) or os.cpu_count() or 1
