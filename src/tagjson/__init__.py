"""tagjson: JSON with pluggable tagged codecs for values JSON cannot represent."""

__version__ = "0.1.0"

from . import settings
from .api import activate_standard_codecs
from .api import deserialize
from .api import modify_codec
from .api import register_codec
from .api import serialize
from .api import unregister_codec
from .codecs import Codec
from .codecs import FunctionCodec
from .exceptions import DepthLimitError
from .exceptions import DeserializationError
from .exceptions import DuplicateTagError
from .exceptions import InvalidArgumentError
from .exceptions import NotFoundError
from .exceptions import SerializationError
from .exceptions import TagJsonError
from .registry import CodecModifier
from .registry import CodecRegistry
from .registry import default_registry

__all__ = [
    "Codec",
    "CodecModifier",
    "CodecRegistry",
    "DepthLimitError",
    "DeserializationError",
    "DuplicateTagError",
    "FunctionCodec",
    "InvalidArgumentError",
    "NotFoundError",
    "SerializationError",
    "TagJsonError",
    "activate_standard_codecs",
    "default_registry",
    "deserialize",
    "modify_codec",
    "register_codec",
    "serialize",
    "settings",
    "unregister_codec",
]
