"""
Centralized exception classes for the tagjson library.

All tagjson-specific exceptions inherit from TagJsonError for easy catching.
"""


class TagJsonError(Exception):
    """Base exception for all tagjson errors."""


class DuplicateTagError(TagJsonError):
    """Raised when a codec is registered under a tag that is already in use."""


class NotFoundError(TagJsonError):
    """Raised when modifying or removing a codec whose tag is not registered."""


class InvalidArgumentError(TagJsonError):
    """Raised when a tag is not a non-empty string or a codec function is not callable."""


class DepthLimitError(TagJsonError):
    """Raised when a value nests deeper than the configured maximum depth (e.g. a cycle)."""


class SerializationError(TagJsonError):
    """Raised when a value cannot be emitted as JSON after the encode pass."""


class DeserializationError(TagJsonError):
    """Raised when the input text is not valid JSON."""
