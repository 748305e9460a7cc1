# -*- coding: utf-8 -*-
"""
FunctionsVisibilityDemo

Four visibility levels, expressed with devchain's export rules:

- public    exported *and* used internally (``public_function``)
- external  exported, reached from inside only through a real call on
            ``ctx.this`` (``call_external_function``)
- internal  plain ``_single_underscore`` method: not in the ABI, usable by
            subclasses
- private   ``__double_underscore`` method: not in the ABI, name-mangled to
            this class

Public ABI (all read-only):
- public_function() -> "public"
- external_function() -> "external"
- call_external_function() -> "external"
- demonstrate_visibility() -> ("public", "internal", "private")
"""
from __future__ import annotations

from typing import Any, Tuple

from devchain.contract import Contract, view


class FunctionsVisibilityDemo(Contract):
    @view
    def public_function(self, ctx: Any) -> str:
        return "public"

    @view
    def external_function(self, ctx: Any) -> str:
        return "external"

    @view
    def call_external_function(self, ctx: Any) -> str:
        return ctx.call(ctx.this, "external_function")

    @view
    def demonstrate_visibility(self, ctx: Any) -> Tuple[str, str, str]:
        return self.public_function(ctx), self._internal_function(), self.__private_function()

    def _internal_function(self) -> str:
        return "internal"

    def __private_function(self) -> str:
        return "private"
