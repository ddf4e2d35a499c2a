"""Internal shared validation functions for codec registration."""

from typing import Any

from tagjson.exceptions import InvalidArgumentError


def check_tag(tag: Any) -> str:
    """
    Checks that a codec tag is a non-empty string.

    Args:
        tag: Tag to validate.

    Returns:
        The validated tag.

    Raises:
        InvalidArgumentError: If the tag is not a string or is empty.
    """
    if not isinstance(tag, str):
        raise InvalidArgumentError(f"Codec tag must be a string, got {type(tag).__name__}")
    if not tag:
        raise InvalidArgumentError("Codec tag must not be empty")
    return tag


def check_callable(func: Any, role: str, tag: str) -> None:
    """
    Checks that a codec function is callable.

    Args:
        func: Predicate, encoder or decoder to validate.
        role: Name of the function's role (used for error messages).
        tag: Tag of the codec being configured (used for error messages).

    Raises:
        InvalidArgumentError: If `func` is not callable.
    """
    if not callable(func):
        raise InvalidArgumentError(
            f"Codec '{tag}' {role} must be callable, got {type(func).__name__}"
        )
