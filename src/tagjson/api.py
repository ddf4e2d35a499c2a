"""Module-level API operating on an explicit registry or the shared default registry."""

from __future__ import annotations

from typing import Any

from tagjson._typing import Decoder
from tagjson._typing import Encoder
from tagjson._typing import Indent
from tagjson._typing import Predicate
from tagjson.registry import CodecModifier
from tagjson.registry import CodecRegistry
from tagjson.registry import default_registry


def serialize(value: Any, indent: Indent = None, *, registry: CodecRegistry | None = None) -> str:
    """
    Serialize `value` to tagged JSON text.

    Args:
        value: Value tree to serialize.
        indent: Pretty-print indentation; compact output when None.
        registry: Registry to use; defaults to the shared `default_registry`.

    Examples:
        >>> import datetime as dt
        >>> from tagjson import CodecRegistry
        >>> registry = CodecRegistry().activate_standard()
        >>> when = dt.datetime(2020, 7, 27, 7, 2, 59, 259000, tzinfo=dt.timezone.utc)
        >>> serialize({"age": 27, "when": when}, registry=registry)
        '{"age":"(00)r","when":"(03)kd45zo3f"}'
    """
    return _resolve(registry).serialize(value, indent)


def deserialize(text: str, *, registry: CodecRegistry | None = None) -> Any:
    """
    Parse tagged JSON text back into a value tree.

    Args:
        text: Text produced by `serialize` (or any JSON text).
        registry: Registry to use; defaults to the shared `default_registry`.
    """
    return _resolve(registry).deserialize(text)


def register_codec(tag: str, predicate: Predicate, encode: Encoder, decode: Decoder) -> None:
    """
    Register a codec on the default registry.

    Raises:
        DuplicateTagError: If `tag` is already registered.
        InvalidArgumentError: If `tag` or any of the functions are invalid.
    """
    default_registry.register(tag, predicate, encode, decode)


def modify_codec(tag: str) -> CodecModifier:
    """
    Modify a codec on the default registry.

    Raises:
        NotFoundError: If `tag` is not registered.
    """
    return default_registry.modify(tag)


def unregister_codec(tag: str) -> None:
    """
    Remove a codec from the default registry.

    Raises:
        NotFoundError: If `tag` is not registered.
    """
    default_registry.unregister(tag)


def activate_standard_codecs() -> None:
    """
    Register the standard codec set on the default registry.

    Raises:
        DuplicateTagError: If any standard tag is already registered.
    """
    default_registry.activate_standard()


def _resolve(registry: CodecRegistry | None) -> CodecRegistry:
    return registry if registry is not None else default_registry
