"""Codec interface and registry entry types."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any

from typing_extensions import override

from tagjson._typing import Decoder
from tagjson._typing import Encoder
from tagjson._typing import Predicate
from tagjson.utils import build_repr


@dataclass
class EncodeEntry:
    """Encode-side registry entry; `predicate` gates which values reach `encode`."""

    tag: str
    predicate: Predicate
    encode: Encoder


@dataclass
class DecodeEntry:
    """Decode-side registry entry; `decode` receives the text following `tag`."""

    tag: str
    decode: Decoder


class Codec(abc.ABC):
    """
    A tagged extension to JSON: a tag plus the ability to match, encode and decode a value kind.

    Subclasses set `tag` and implement the three methods. `encode` is only called on values for
    which `matches` returned True; returning None (or an empty string) from `encode` hands the
    value to the next registered codec. `decode` receives the text following the tag and returns
    None, False or "" to leave the string untouched.
    """

    tag: str

    @abc.abstractmethod
    def matches(self, value: Any) -> bool:
        """Returns True if this codec applies to `value`."""
        ...

    @abc.abstractmethod
    def encode(self, value: Any) -> str | None:
        """Encodes a matched value into a payload string."""
        ...

    @abc.abstractmethod
    def decode(self, payload: str) -> Any:
        """Decodes a payload string, or returns None if it is not recognized."""
        ...

    def __repr__(self) -> str:
        return build_repr(type(self).__name__, repr(self.tag))


class FunctionCodec(Codec):
    """Codec assembled from three plain callables."""

    def __init__(self, tag: str, predicate: Predicate, encoder: Encoder, decoder: Decoder) -> None:
        self.tag = tag
        self._predicate = predicate
        self._encoder = encoder
        self._decoder = decoder

    @override
    def matches(self, value: Any) -> bool:
        return bool(self._predicate(value))

    @override
    def encode(self, value: Any) -> str | None:
        return self._encoder(value)

    @override
    def decode(self, payload: str) -> Any:
        return self._decoder(payload)
