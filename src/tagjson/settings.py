from __future__ import annotations

import threading
from dataclasses import dataclass

_GLOBAL_TAGJSON_SETTINGS: TagJsonSettings | None = None
_SETTINGS_LOCK = threading.RLock()


@dataclass(frozen=True)
class TagJsonSettings:
    """Configuration settings for tagjson."""

    max_depth: int = 100
    """
    Maximum nesting depth for the encode pass and the tag resolver.

    Nested calls made by composite codecs count against the same budget. Exceeding it raises
    DepthLimitError, which is how cyclic object graphs are reported.
    """

    ensure_ascii: bool = False
    """Escape non-ASCII characters in serialized output."""

    sort_keys: bool = False
    """Sort object keys in serialized output."""


def get_global_settings() -> TagJsonSettings:
    """
    Get the global tagjson settings instance (thread-safe).

    If no global settings have been set, returns a default instance.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_TAGJSON_SETTINGS
        if _GLOBAL_TAGJSON_SETTINGS is None:
            _GLOBAL_TAGJSON_SETTINGS = TagJsonSettings()
        return _GLOBAL_TAGJSON_SETTINGS


def set_global_settings(settings: TagJsonSettings) -> None:
    """
    Set the global tagjson settings instance (thread-safe).

    Args:
        settings (TagJsonSettings): Settings to set as global.
    """
    with _SETTINGS_LOCK:
        global _GLOBAL_TAGJSON_SETTINGS
        _GLOBAL_TAGJSON_SETTINGS = settings
