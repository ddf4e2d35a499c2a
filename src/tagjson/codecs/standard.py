"""
The standard codec set.

Six codecs covering the value kinds JSON drops or mangles:

========  =========================  ================================================
Tag       Codec                      Values
========  =========================  ================================================
``(00)``  ExactNumberCodec           floats and ints within the IEEE-754 safe range
``(01)``  BigIntegerCodec            any int
``(02)``  PatternCodec               compiled ``str`` regular expressions
``(03)``  TimestampCodec             ``datetime.datetime`` (millisecond precision)
``(04)``  KeyedCollectionCodec       mappings that are not plain JSON objects
``(05)``  UniqueCollectionCodec      ``set`` and ``frozenset``
========  =========================  ================================================

The two collection codecs serialize their contents through the registry they are bound to, so
nested values (datetime keys, sets of patterns, ...) are tagged as well.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from tagjson.codecs.base import Codec
from tagjson.exceptions import DeserializationError
from tagjson.utils import freeze
from tagjson.utils import from_base36
from tagjson.utils import from_decimal
from tagjson.utils import to_base36
from tagjson.utils import to_decimal

if TYPE_CHECKING:
    from tagjson.registry import CodecRegistry

EXACT_NUMBER_TAG = "(00)"
BIG_INTEGER_TAG = "(01)"
PATTERN_TAG = "(02)"
TIMESTAMP_TAG = "(03)"
KEYED_COLLECTION_TAG = "(04)"
UNIQUE_COLLECTION_TAG = "(05)"

STANDARD_TAGS = (
    EXACT_NUMBER_TAG,
    BIG_INTEGER_TAG,
    PATTERN_TAG,
    TIMESTAMP_TAG,
    KEYED_COLLECTION_TAG,
    UNIQUE_COLLECTION_TAG,
)

MAX_SAFE_INTEGER = 2**53 - 1
FLOAT_MARKER = "~"
FLAGS_SEPARATOR = "___flags___"

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_MILLISECOND = dt.timedelta(milliseconds=1)

# Inline-flag letters; re.UNICODE is implied for str patterns and never written.
_FLAG_LETTERS = {
    "a": re.ASCII,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ExactNumberCodec(Codec):
    """
    Numbers as exact text tokens.

    Integers are written as signed base-36 digits. Floats are written as the marker ``~``
    followed by their shortest round-tripping ``repr``, which keeps them lossless and also
    covers ``inf`` and ``nan``. Integers outside the safe range are left to BigIntegerCodec.
    """

    tag = EXACT_NUMBER_TAG

    @override
    def matches(self, value: Any) -> bool:
        if isinstance(value, float):
            return True
        return _is_int(value) and abs(value) <= MAX_SAFE_INTEGER

    @override
    def encode(self, value: Any) -> str | None:
        if isinstance(value, float):
            return FLOAT_MARKER + repr(value)
        return to_base36(value)

    @override
    def decode(self, payload: str) -> Any:
        if payload.startswith(FLOAT_MARKER):
            try:
                return float(payload[len(FLOAT_MARKER) :])
            except ValueError:
                return None
        return from_base36(payload)


class BigIntegerCodec(Codec):
    """Arbitrary-precision integers as decimal text."""

    tag = BIG_INTEGER_TAG

    @override
    def matches(self, value: Any) -> bool:
        return _is_int(value)

    @override
    def encode(self, value: Any) -> str | None:
        return to_decimal(value)

    @override
    def decode(self, payload: str) -> Any:
        return from_decimal(payload)


class PatternCodec(Codec):
    """Compiled regular expressions as ``source___flags___letters``."""

    tag = PATTERN_TAG

    @override
    def matches(self, value: Any) -> bool:
        return isinstance(value, re.Pattern) and isinstance(value.pattern, str)

    @override
    def encode(self, value: Any) -> str | None:
        letters = "".join(
            letter for letter, flag in _FLAG_LETTERS.items() if value.flags & flag
        )
        return value.pattern + FLAGS_SEPARATOR + letters

    @override
    def decode(self, payload: str) -> Any:
        source, separator, letters = payload.rpartition(FLAGS_SEPARATOR)
        if not separator:
            return None

        flags = 0
        for letter in letters:
            if letter == "u":
                flags |= re.UNICODE
            elif letter in _FLAG_LETTERS:
                flags |= _FLAG_LETTERS[letter]
            else:
                return None

        try:
            return re.compile(source, flags)
        except re.error:
            return None


class TimestampCodec(Codec):
    """
    Datetimes as base-36 milliseconds since the Unix epoch.

    Naive datetimes are taken to be UTC. Decoded values are timezone-aware UTC datetimes;
    sub-millisecond precision is truncated.
    """

    tag = TIMESTAMP_TAG

    @override
    def matches(self, value: Any) -> bool:
        return isinstance(value, dt.datetime)

    @override
    def encode(self, value: Any) -> str | None:
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        return to_base36((value - _EPOCH) // _MILLISECOND)

    @override
    def decode(self, payload: str) -> Any:
        millis = from_base36(payload)
        if millis is None:
            return None
        try:
            return _EPOCH + millis * _MILLISECOND
        except OverflowError:
            return None


class KeyedCollectionCodec(Codec):
    """
    Mappings JSON objects cannot hold, as a tagged list of ``[key, value]`` pairs.

    Applies to dict subclasses (e.g. ``OrderedDict``), non-dict mappings and plain dicts with at
    least one non-string key. Decoded values are plain dicts; list and set keys are frozen into
    tuples and frozensets.
    """

    tag = KEYED_COLLECTION_TAG

    def __init__(self, registry: CodecRegistry) -> None:
        self._registry = registry

    @override
    def matches(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False
        if type(value) is not dict:
            return True
        return any(not isinstance(key, str) for key in value)

    @override
    def encode(self, value: Any) -> str | None:
        return self._registry.serialize([[key, item] for key, item in value.items()])

    @override
    def decode(self, payload: str) -> Any:
        try:
            pairs = self._registry.deserialize(payload)
        except DeserializationError:
            return None
        if not isinstance(pairs, list):
            return None
        if not all(isinstance(pair, list) and len(pair) == 2 for pair in pairs):
            return None
        try:
            return {freeze(key): item for key, item in pairs}
        except TypeError:  # a key is still unhashable, e.g. a JSON object
            return None


class UniqueCollectionCodec(Codec):
    """Sets as a tagged list of members, rebuilt into a ``set`` on decode."""

    tag = UNIQUE_COLLECTION_TAG

    def __init__(self, registry: CodecRegistry) -> None:
        self._registry = registry

    @override
    def matches(self, value: Any) -> bool:
        return isinstance(value, (set, frozenset))

    @override
    def encode(self, value: Any) -> str | None:
        return self._registry.serialize(list(value))

    @override
    def decode(self, payload: str) -> Any:
        try:
            members = self._registry.deserialize(payload)
        except DeserializationError:
            return None
        if not isinstance(members, list):
            return None
        try:
            return {freeze(member) for member in members}
        except TypeError:  # a member is still unhashable, e.g. a JSON object
            return None


def standard_codecs(registry: CodecRegistry) -> list[Codec]:
    """
    Build the six standard codecs, in precedence order, bound to `registry`.

    Args:
        registry: Registry the collection codecs serialize their contents through.
    """
    return [
        ExactNumberCodec(),
        BigIntegerCodec(),
        PatternCodec(),
        TimestampCodec(),
        KeyedCollectionCodec(registry),
        UniqueCollectionCodec(registry),
    ]
