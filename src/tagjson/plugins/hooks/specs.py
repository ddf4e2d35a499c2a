"""Hook specifications for contributing codecs from plugins."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tagjson.plugins.hooks.markers import hook_spec

if TYPE_CHECKING:
    from tagjson.codecs.base import Codec
    from tagjson.registry import CodecRegistry


class CodecSpec:
    """Hook specifications for codec plugins."""

    @hook_spec
    def tagjson_codecs(self, registry: CodecRegistry) -> list[Codec]:
        """
        Called to collect the codecs a plugin contributes to a registry.

        The codecs are registered in the order returned, after any codecs already on the registry.
        Collection codecs that serialize their contents should be bound to `registry`.

        Args:
            registry: Registry the codecs are being collected for.

        Returns:
            Codecs to register, in precedence order.
        """
