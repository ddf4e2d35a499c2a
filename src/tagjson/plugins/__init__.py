from .hooks import hook_impl
from .manager import collect_plugin_codecs
from .manager import load_plugin_codecs
from .manager import register_plugins
from .manager import register_plugins_entry_points
from .manager import reset_plugins

__all__ = [
    "collect_plugin_codecs",
    "hook_impl",
    "load_plugin_codecs",
    "register_plugins",
    "register_plugins_entry_points",
    "reset_plugins",
]
