"""Codec interface and the standard codec set."""

from .base import Codec
from .base import FunctionCodec
from .standard import STANDARD_TAGS
from .standard import BigIntegerCodec
from .standard import ExactNumberCodec
from .standard import KeyedCollectionCodec
from .standard import PatternCodec
from .standard import TimestampCodec
from .standard import UniqueCollectionCodec
from .standard import standard_codecs

__all__ = [
    "BigIntegerCodec",
    "Codec",
    "ExactNumberCodec",
    "FunctionCodec",
    "KeyedCollectionCodec",
    "PatternCodec",
    "STANDARD_TAGS",
    "TimestampCodec",
    "UniqueCollectionCodec",
    "standard_codecs",
]
