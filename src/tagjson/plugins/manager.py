"""Discovery and loading of codec plugins."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from inspect import isclass
from typing import TYPE_CHECKING, Any

from pluggy import PluginManager

from .hooks.markers import HOOK_NAMESPACE
from .hooks.specs import CodecSpec

if TYPE_CHECKING:
    from tagjson.codecs.base import Codec
    from tagjson.registry import CodecRegistry

logger = logging.getLogger(__name__)

_PLUGIN_ENTRY_POINT = "tagjson.codecs"  # entry-point group installed packages list plugins under
_GLOBAL_PLUGINS: PluginManager | None = None
_GLOBAL_PLUGINS_LOCK = threading.Lock()


# region API


def global_plugins() -> PluginManager:
    """Returns the process-wide plugin manager, creating it on first use."""
    global _GLOBAL_PLUGINS
    with _GLOBAL_PLUGINS_LOCK:
        if _GLOBAL_PLUGINS is None:
            _GLOBAL_PLUGINS = _new_manager()
        return _GLOBAL_PLUGINS


def reset_plugins() -> None:
    """Forget every globally registered plugin."""
    global _GLOBAL_PLUGINS
    with _GLOBAL_PLUGINS_LOCK:
        _GLOBAL_PLUGINS = None


def register_plugins(*plugins: Any) -> None:
    """Register codec plugin instances for every later `load_plugin_codecs` call."""
    manager = global_plugins()
    for plugin in plugins:
        if _add(manager, plugin):
            logger.debug(f"Registered codec plugin {type(plugin).__qualname__}")


def register_plugins_entry_points(manager: PluginManager | None = None) -> int:
    """
    Register codec plugins advertised under the ``tagjson.codecs`` entry-point group.

    Args:
        manager: Plugin manager to load into; defaults to the global one.

    Returns:
        The number of plugins loaded.
    """
    manager = manager if manager is not None else global_plugins()
    count = manager.load_setuptools_entrypoints(_PLUGIN_ENTRY_POINT)
    logger.debug(f"Loaded {count} codec plugin(s) from '{_PLUGIN_ENTRY_POINT}' entry points")
    return count


def build_plugin_manager(plugins: Iterable[Any] = ()) -> PluginManager:
    """
    Build a plugin manager holding the global plugins followed by `plugins`.

    The global manager is left untouched, so `plugins` only apply to the returned manager.

    Raises:
        TypeError: If a plugin is a class rather than an instance.
    """
    manager = _new_manager()
    for _, plugin in global_plugins().list_name_plugin():
        if plugin is not None:  # blocked plugins are listed as None
            _add(manager, plugin)
    for plugin in plugins:
        _add(manager, plugin)
    return manager


def collect_plugin_codecs(registry: CodecRegistry, plugins: Iterable[Any] = ()) -> list[Codec]:
    """
    Collect the codecs contributed by the global plugins and `plugins`, in registration order.

    Args:
        registry: Registry the codecs are collected for; passed to every hook implementation.
        plugins: Additional plugin instances used for this call only.
    """
    manager = build_plugin_manager(plugins)
    # hook results come back last-registered-first
    contributions = manager.hook.tagjson_codecs(registry=registry)
    return [codec for codecs in reversed(contributions) for codec in codecs]


def load_plugin_codecs(registry: CodecRegistry, plugins: Iterable[Any] = ()) -> list[str]:
    """
    Register every plugin-contributed codec on `registry`.

    Global plugins come first, in registration order, followed by `plugins`.

    Returns:
        Tags of the registered codecs, in precedence order.

    Raises:
        DuplicateTagError: If a contributed tag is already registered.
    """
    tags = []
    for codec in collect_plugin_codecs(registry, plugins):
        registry.register_codec(codec)
        tags.append(codec.tag)
    logger.debug(f"Loaded plugin codecs {tags}")
    return tags


# region Helpers


def _add(manager: PluginManager, plugin: Any) -> bool:
    """Register `plugin` unless already present; returns True if it was added."""
    if isclass(plugin):
        raise TypeError(
            "tagjson expects plugins to be registered as instances. "
            "Have you forgotten the `()` when registering a plugin class?"
        )
    if manager.is_registered(plugin):
        return False
    manager.register(plugin)
    return True


def _new_manager() -> PluginManager:
    manager = PluginManager(HOOK_NAMESPACE)
    manager.add_hookspecs(CodecSpec)
    if logger.isEnabledFor(logging.DEBUG):
        manager.trace.root.setwriter(logger.debug)
        manager.enable_tracing()
    return manager
