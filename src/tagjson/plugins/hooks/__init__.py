from .markers import HOOK_NAMESPACE
from .markers import hook_impl
from .markers import hook_spec

__all__ = ["HOOK_NAMESPACE", "hook_impl", "hook_spec"]
