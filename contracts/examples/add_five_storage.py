# -*- coding: utf-8 -*-
"""
AddFiveStorage

SimpleStorage whose ``store(n)`` keeps ``n + 5``. The addition is checked,
so ``store(2**256 - 5)`` reverts with Panic(0x11).
"""
from __future__ import annotations

from typing import Any

from devchain.contract import external

from contracts.stdlib.math.safe_uint import u256_add

from .simple_storage import SimpleStorage

BONUS = 5


class AddFiveStorage(SimpleStorage):
    @external
    def store(self, ctx: Any, n: int) -> None:
        super().store(ctx, u256_add(n, BONUS))
