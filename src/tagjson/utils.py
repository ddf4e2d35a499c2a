"""Shared utility helpers for tagjson."""

from __future__ import annotations

import re
import reprlib
from collections.abc import Mapping
from typing import Any

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_BASE36_PATTERN = re.compile(r"-?[0-9a-z]+")
_DECIMAL_PATTERN = re.compile(r"-?[0-9]+")
_DECIMAL_CHUNK = 1000
_DECIMAL_CHUNK_BASE = 10**_DECIMAL_CHUNK


def build_repr(class_name: str, *leading: str, kwargs: Mapping[str, Any] | None = None) -> str:
    """Build a concise repr string: ``ClassName(leading…, k=v, …)``."""
    parts = list(leading)
    if kwargs:
        parts.extend(f"{k}={reprlib.Repr().repr(v)}" for k, v in kwargs.items())
    return f"{class_name}({', '.join(parts)})"


def to_base36(number: int) -> str:
    """
    Format an integer as signed lowercase base-36 digits.

    Examples:
        >>> to_base36(27)
        'r'
        >>> to_base36(-10)
        '-a'
        >>> to_base36(0)
        '0'
    """
    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    number = abs(number)
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return sign + "".join(reversed(digits))


def from_base36(text: str) -> int | None:
    """
    Parse signed lowercase base-36 digits, returning None for anything else.

    Examples:
        >>> from_base36("r")
        27
        >>> from_base36("not base36!") is None
        True
    """
    if not _BASE36_PATTERN.fullmatch(text):
        return None
    try:
        return int(text, 36)
    except ValueError:  # longer than the interpreter allows for int/str conversion
        return None


def to_decimal(number: int) -> str:
    """
    Format an integer as decimal text, without the interpreter's digit limit on ``str(int)``.

    Examples:
        >>> to_decimal(-10)
        '-10'
        >>> len(to_decimal(10**5000))
        5001
    """
    sign = "-" if number < 0 else ""
    number = abs(number)
    chunks = []
    while number >= _DECIMAL_CHUNK_BASE:
        number, remainder = divmod(number, _DECIMAL_CHUNK_BASE)
        chunks.append(f"{remainder:0{_DECIMAL_CHUNK}d}")
    chunks.append(str(number))
    return sign + "".join(reversed(chunks))


def from_decimal(text: str) -> int | None:
    """
    Parse signed decimal digits of any length, returning None for anything else.

    Examples:
        >>> from_decimal("-10")
        -10
        >>> from_decimal("1.0") is None
        True
    """
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    sign, digits = (-1, text[1:]) if text.startswith("-") else (1, text)
    number = 0
    for start in range(0, len(digits), _DECIMAL_CHUNK):
        chunk = digits[start : start + _DECIMAL_CHUNK]
        number = number * 10 ** len(chunk) + int(chunk)
    return sign * number


def freeze(value: Any) -> Any:
    """Recursively convert lists and sets into tuples and frozensets so they can be hashed."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(item) for item in value)
    return value
