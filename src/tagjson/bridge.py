"""
Format bridge between tagjson traversals and the standard-library JSON engine.

The bridge exposes the two hook points the codec registry needs:

- ``dumps(value, hook)`` calls ``hook(key, value)`` for every node, pre-order, starting with the
  root (key ``""``). The hook's return value is what gets emitted, and its children are walked
  in turn.
- ``loads(text, hook)`` parses the text and calls ``hook(key, value)`` for every scalar,
  children before parents, using the hook's return value as the reconstructed value.

Both walks share a nesting budget tracked per execution context, so that codecs which call back
into ``serialize``/``deserialize`` for their contents spend from the same budget as the outer
call.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from tagjson._typing import Indent
from tagjson._typing import NodeHook
from tagjson.exceptions import DepthLimitError
from tagjson.exceptions import DeserializationError
from tagjson.exceptions import SerializationError

_depth: ContextVar[int] = ContextVar("tagjson_depth", default=0)


def walk(value: Any, hook: NodeHook, max_depth: int) -> Any:
    """
    Apply `hook` to every node of `value`, pre-order, and return the rebuilt tree.

    Dicts, lists and tuples returned by the hook are walked recursively (tuples become lists).
    The input tree is never modified.

    Raises:
        DepthLimitError: If containers nest deeper than `max_depth`.
    """
    return _walk("", value, hook, max_depth)


def revive(value: Any, hook: NodeHook, max_depth: int) -> Any:
    """
    Apply `hook` to every scalar of a parsed JSON tree, children before parents.

    Raises:
        DepthLimitError: If containers nest deeper than `max_depth`.
    """
    return _revive("", value, hook, max_depth)


def dumps(
    value: Any,
    hook: NodeHook,
    indent: Indent = None,
    *,
    max_depth: int,
    ensure_ascii: bool = False,
    sort_keys: bool = False,
) -> str:
    """
    Serialize `value` to JSON text after passing every node through `hook`.

    Args:
        value: Value tree to serialize.
        hook: Per-node callback, see `walk`.
        indent: Pretty-print indentation (spaces or a literal string); compact output when None.
        max_depth: Maximum container nesting.
        ensure_ascii: Escape non-ASCII characters.
        sort_keys: Sort object keys.

    Raises:
        SerializationError: If a value is left that JSON cannot represent.
        DepthLimitError: If containers nest deeper than `max_depth`.
    """
    tree = walk(value, hook, max_depth)
    separators = (",", ":") if indent is None else None
    try:
        return json.dumps(
            tree,
            indent=indent,
            separators=separators,
            ensure_ascii=ensure_ascii,
            sort_keys=sort_keys,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize value: {e}") from e


def loads(text: str, hook: NodeHook, *, max_depth: int) -> Any:
    """
    Parse JSON `text`, passing every scalar through `hook`, bottom-up.

    Raises:
        DeserializationError: If `text` is not valid JSON.
        DepthLimitError: If containers nest deeper than `max_depth`.
    """
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as e:
        raise DeserializationError(f"Invalid JSON text: {e}") from e
    except RecursionError as e:
        raise DepthLimitError("JSON text nests too deeply to parse") from e
    return revive(tree, hook, max_depth)


# region Helpers


@contextmanager
def _nested(max_depth: int) -> Iterator[None]:
    """Enter one container level, raising once the budget is exceeded."""
    depth = _depth.get() + 1
    if depth > max_depth:
        raise DepthLimitError(
            f"Maximum nesting depth of {max_depth} exceeded; the value may contain a cycle"
        )
    token = _depth.set(depth)
    try:
        yield
    finally:
        _depth.reset(token)


def _walk(key: str, value: Any, hook: NodeHook, max_depth: int) -> Any:
    value = hook(key, value)
    if isinstance(value, dict):
        with _nested(max_depth):
            return {k: _walk(str(k), v, hook, max_depth) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        with _nested(max_depth):
            return [_walk(str(i), v, hook, max_depth) for i, v in enumerate(value)]
    return value


def _revive(key: str, value: Any, hook: NodeHook, max_depth: int) -> Any:
    if isinstance(value, dict):
        with _nested(max_depth):
            return {k: _revive(k, v, hook, max_depth) for k, v in value.items()}
    if isinstance(value, list):
        with _nested(max_depth):
            return [_revive(str(i), v, hook, max_depth) for i, v in enumerate(value)]
    return hook(key, value)
