# -*- coding: utf-8 -*-
"""MathUtilsDemo: checked addition, uint type limits and block info."""
from __future__ import annotations

from typing import Any, Tuple

from devchain.contract import Contract, pure, view

from contracts.stdlib.math.safe_uint import type_limits, u256_add


class MathUtilsDemo(Contract):
    @pure
    def add(self, ctx: Any, a: int, b: int) -> int:
        return u256_add(a, b)

    @pure
    def get_type_limits(self, ctx: Any) -> Tuple[int, int, int, int]:
        return type_limits()

    @view
    def get_block_info(self, ctx: Any) -> Tuple[int, int, bytes]:
        return ctx.block.timestamp, ctx.block.height, ctx.block.coinbase
