"""Pluggy markers for tagjson hook specifications and implementations."""

from pluggy import HookimplMarker
from pluggy import HookspecMarker

HOOK_NAMESPACE = "tagjson"

hook_spec = HookspecMarker(HOOK_NAMESPACE)
hook_impl = HookimplMarker(HOOK_NAMESPACE)
