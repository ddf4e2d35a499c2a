from typing import Any, Callable, Union

from typing_extensions import TypeAlias

Predicate: TypeAlias = Callable[[Any], bool]
"""Applicability check for an encode entry; only matching values reach the encoder."""

Encoder: TypeAlias = Callable[[Any], Union[str, None]]
"""Turns a matched value into a payload; an empty or None payload means "try the next entry"."""

Decoder: TypeAlias = Callable[[str], Any]
"""Turns the text after a tag back into a value; None, False or "" leave the string unchanged."""

NodeHook: TypeAlias = Callable[[str, Any], Any]
"""Per-node callback handed to the format bridge, called with ``(key, value)``."""

Indent: TypeAlias = Union[int, str, None]
"""Pretty-print indentation accepted by ``serialize``."""
