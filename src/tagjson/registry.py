"""
Tagged codec registry.

This module provides the registry that drives tagged serialization. A registry holds an ordered
list of encode entries and an ordered list of decode entries; registration order is precedence,
and the first entry that matches a value (or prefixes a string) wins.

Key components:
- CodecRegistry: Register, modify and remove codecs; run the encode pass and the tag resolver
- CodecModifier: Fluent helper returned by `CodecRegistry.modify`
- default_registry: Shared registry used by the module-level API

Example:
    >>> from tagjson.registry import CodecRegistry
    >>> registry = CodecRegistry().activate_standard()
    >>> registry.serialize({"age": 27})
    '{"age":"(00)r"}'
    >>> registry.deserialize('{"age":"(00)r"}')
    {'age': 27}
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from tagjson import bridge
from tagjson._typing import Decoder
from tagjson._typing import Encoder
from tagjson._typing import Indent
from tagjson._typing import NodeHook
from tagjson._typing import Predicate
from tagjson._validation import check_callable
from tagjson._validation import check_tag
from tagjson.codecs.base import Codec
from tagjson.codecs.base import DecodeEntry
from tagjson.codecs.base import EncodeEntry
from tagjson.codecs.standard import standard_codecs
from tagjson.exceptions import DuplicateTagError
from tagjson.exceptions import InvalidArgumentError
from tagjson.exceptions import NotFoundError
from tagjson.settings import get_global_settings
from tagjson.utils import build_repr

logger = logging.getLogger(__name__)


class CodecRegistry:
    """
    Ordered collection of tagged codecs plus the traversals that apply them.

    All mutations are guarded by a re-entrant lock. Each traversal works on a snapshot of the
    entry lists taken when it starts, so codecs registered or removed concurrently only affect
    later calls.
    """

    def __init__(self) -> None:
        self._encoders: list[EncodeEntry] = []
        self._decoders: list[DecodeEntry] = []
        self._lock = threading.RLock()

    # region Registration

    def register(
        self, tag: str, predicate: Predicate, encode: Encoder, decode: Decoder
    ) -> CodecRegistry:
        """
        Register a codec under `tag`, after all existing codecs.

        Args:
            tag: Prefix written in front of encoded payloads; must be unique in this registry.
            predicate: Returns True for values this codec should encode.
            encode: Turns a matched value into a payload string; None or "" defers to the next
                codec.
            decode: Turns a payload back into a value; None, False or "" leave
                the string unchanged.

        Returns:
            This registry, for chaining.

        Raises:
            InvalidArgumentError: If `tag` is not a non-empty string or a function is not callable.
            DuplicateTagError: If `tag` is already registered.
        """
        check_tag(tag)
        check_callable(predicate, "predicate", tag)
        check_callable(encode, "encoder", tag)
        check_callable(decode, "decoder", tag)

        with self._lock:
            if self.find(tag) is not None:
                raise DuplicateTagError(f"Codec '{tag}' is already registered")
            self._encoders.append(EncodeEntry(tag, predicate, encode))
            self._decoders.append(DecodeEntry(tag, decode))

        logger.debug(f"Registered codec '{tag}'")
        return self

    def register_codec(self, codec: Codec) -> CodecRegistry:
        """
        Register a `Codec` instance under its own tag.

        Raises:
            InvalidArgumentError: If `codec` is not a Codec.
            DuplicateTagError: If the codec's tag is already registered.
        """
        if not isinstance(codec, Codec):
            raise InvalidArgumentError(f"Expected a Codec instance, got {type(codec).__name__}")
        return self.register(codec.tag, codec.matches, codec.encode, codec.decode)

    def activate_standard(self) -> CodecRegistry:
        """
        Register the six standard codecs, bound to this registry, in their fixed order.

        Raises:
            DuplicateTagError: If any standard tag is already registered. Codecs registered
                before the colliding one stay registered.
        """
        for codec in standard_codecs(self):
            self.register_codec(codec)
        return self

    def unregister(self, tag: str) -> None:
        """
        Remove the codec registered under `tag` from both the encode and decode side.

        Raises:
            NotFoundError: If `tag` is not registered.
        """
        check_tag(tag)
        with self._lock:
            indices = self.find(tag)
            if indices is None:
                raise NotFoundError(f"Codec '{tag}' is not registered")
            encode_index, decode_index = indices
            del self._encoders[encode_index]
            del self._decoders[decode_index]

        logger.debug(f"Unregistered codec '{tag}'")

    def clear(self) -> None:
        """Remove every registered codec."""
        with self._lock:
            self._encoders.clear()
            self._decoders.clear()

    # region Modification

    def modify(self, tag: str) -> CodecModifier:
        """
        Start modifying the codec registered under `tag`.

        Example:
            >>> registry = CodecRegistry().activate_standard()
            >>> modifier = registry.modify("(00)").predicate(lambda v: isinstance(v, float))
            >>> registry.serialize({"n": 1})
            '{"n":"(01)1"}'

        Raises:
            NotFoundError: If `tag` is not registered.
        """
        self._require(tag)
        return CodecModifier(self, tag)

    def replace_predicate(self, tag: str, predicate: Predicate) -> CodecRegistry:
        """Replace the predicate of the codec registered under `tag`."""
        check_callable(predicate, "predicate", tag)
        with self._lock:
            encode_index, _ = self._require(tag)
            self._encoders[encode_index].predicate = predicate
        logger.debug(f"Replaced predicate of codec '{tag}'")
        return self

    def replace_encoder(self, tag: str, encode: Encoder) -> CodecRegistry:
        """Replace the encoder of the codec registered under `tag`."""
        check_callable(encode, "encoder", tag)
        with self._lock:
            encode_index, _ = self._require(tag)
            self._encoders[encode_index].encode = encode
        logger.debug(f"Replaced encoder of codec '{tag}'")
        return self

    def replace_decoder(self, tag: str, decode: Decoder) -> CodecRegistry:
        """Replace the decoder of the codec registered under `tag`."""
        check_callable(decode, "decoder", tag)
        with self._lock:
            _, decode_index = self._require(tag)
            self._decoders[decode_index].decode = decode
        logger.debug(f"Replaced decoder of codec '{tag}'")
        return self

    # region Lookup

    def find(self, tag: str) -> tuple[int, int] | None:
        """
        Locate `tag` on both sides of the registry.

        Returns:
            ``(encode_index, decode_index)``, or None unless the tag has both an encode and a
            decode entry.
        """
        with self._lock:
            encode_index = next((i for i, e in enumerate(self._encoders) if e.tag == tag), None)
            decode_index = next((i for i, e in enumerate(self._decoders) if e.tag == tag), None)
        if encode_index is None or decode_index is None:
            return None
        return encode_index, decode_index

    @property
    def tags(self) -> list[str]:
        """Registered tags in precedence order."""
        with self._lock:
            return [entry.tag for entry in self._encoders]

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and self.find(tag) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._encoders)

    def __repr__(self) -> str:
        return build_repr("CodecRegistry", kwargs={"tags": self.tags})

    # region Traversals

    def encode(self, value: Any) -> Any:
        """
        Run the encode pass: return a copy of `value` with every matched node replaced by its
        tagged string. `value` itself is left untouched.

        Raises:
            DepthLimitError: If `value` nests deeper than the configured maximum (e.g. a cycle).
        """
        return bridge.walk(value, self._encode_hook(), get_global_settings().max_depth)

    def decode(self, value: Any) -> Any:
        """
        Run the tag resolver over a parsed JSON tree: every string that starts with a registered
        tag, and whose decoder accepts the payload, is replaced by the decoded value.

        Raises:
            DepthLimitError: If `value` nests deeper than the configured maximum.
        """
        return bridge.revive(value, self._decode_hook(), get_global_settings().max_depth)

    def serialize(self, value: Any, indent: Indent = None) -> str:
        """
        Serialize `value` to tagged JSON text.

        Args:
            value: Value tree to serialize.
            indent: Pretty-print indentation, as for `json.dumps`; compact output when None.

        Raises:
            SerializationError: If a value is left that neither a codec nor JSON can represent.
            DepthLimitError: If `value` nests deeper than the configured maximum (e.g. a cycle).
        """
        settings = get_global_settings()
        return bridge.dumps(
            value,
            self._encode_hook(),
            indent,
            max_depth=settings.max_depth,
            ensure_ascii=settings.ensure_ascii,
            sort_keys=settings.sort_keys,
        )

    def deserialize(self, text: str) -> Any:
        """
        Parse tagged JSON text back into a value tree.

        Raises:
            DeserializationError: If `text` is not valid JSON.
            DepthLimitError: If `text` nests deeper than the configured maximum.
        """
        return bridge.loads(text, self._decode_hook(), max_depth=get_global_settings().max_depth)

    # region Helpers

    def _require(self, tag: str) -> tuple[int, int]:
        check_tag(tag)
        indices = self.find(tag)
        if indices is None:
            raise NotFoundError(f"Codec '{tag}' is not registered")
        return indices

    def _encode_hook(self) -> NodeHook:
        with self._lock:
            entries = tuple(self._encoders)

        def hook(key: str, value: Any) -> Any:
            for entry in entries:
                if not entry.predicate(value):
                    continue
                payload = entry.encode(value)
                if payload:
                    return entry.tag + str(payload)
            return value

        return hook

    def _decode_hook(self) -> NodeHook:
        with self._lock:
            entries = tuple(self._decoders)

        def hook(key: str, value: Any) -> Any:
            if not isinstance(value, str):
                return value
            for entry in entries:
                if not value.startswith(entry.tag):
                    continue
                decoded = entry.decode(value[len(entry.tag) :])
                if not _declined(decoded):
                    return decoded
            return value

        return hook


def _declined(decoded: Any) -> bool:
    """None, False and "" mean the decoder declined; 0 and empty containers are real results."""
    return decoded is None or decoded is False or (isinstance(decoded, str) and not decoded)


class CodecModifier:
    """
    Fluent helper for replacing parts of a registered codec.

    Example:
        >>> registry = CodecRegistry().activate_standard()
        >>> _ = (
        ...     registry.modify("(03)")
        ...     .encoder(lambda d: d.isoformat())
        ...     .decoder(lambda s: s)
        ... )
    """

    def __init__(self, registry: CodecRegistry, tag: str) -> None:
        self._registry = registry
        self._tag = tag

    @property
    def tag(self) -> str:
        return self._tag

    def predicate(self, predicate: Predicate) -> CodecModifier:
        """Replace the codec's predicate."""
        self._registry.replace_predicate(self._tag, predicate)
        return self

    def encoder(self, encode: Encoder) -> CodecModifier:
        """Replace the codec's encoder."""
        self._registry.replace_encoder(self._tag, encode)
        return self

    def decoder(self, decode: Decoder) -> CodecModifier:
        """Replace the codec's decoder."""
        self._registry.replace_decoder(self._tag, decode)
        return self

    def __repr__(self) -> str:
        return build_repr("CodecModifier", repr(self._tag))


default_registry = CodecRegistry()
"""Shared registry used by the module-level API; starts empty."""
