# -*- coding: utf-8 -*-
"""
contracts.stdlib.control.guard
==============================

Single-call reentrancy latch kept in contract storage.

The latch lives in storage rather than on the contract instance because a
re-entrant call gets a fresh instance; only storage is shared between the
outer and inner frame.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from devchain.errors import Revert

from ..utils.codec import decode_bool, encode_bool

REENTRANCY_ERROR = "ReentrancyGuardReentrantCall"
REENTRANCY_PREFIX = b"control:reentrancy:"


def latch_key(scope: bytes = b"default") -> bytes:
    return REENTRANCY_PREFIX + scope


def is_entered(ctx: Any, scope: bytes = b"default") -> bool:
    return decode_bool(ctx.storage.get(latch_key(scope)))


def not_entered(scope: bytes = b"default"):
    """Gate form of the latch check (does not set the latch)."""

    def check(ctx: Any) -> Optional[Revert]:
        if is_entered(ctx, scope):
            return Revert.custom(REENTRANCY_ERROR)
        return None

    return check


@contextmanager
def non_reentrant(ctx: Any, scope: bytes = b"default") -> Iterator[None]:
    """Hold the latch for the body; revert if it is already held."""
    failure = not_entered(scope)(ctx)
    if failure is not None:
        raise failure
    ctx.storage.set(latch_key(scope), encode_bool(True))
    try:
        yield
    finally:
        ctx.storage.delete(latch_key(scope))


__all__ = [
    "REENTRANCY_ERROR",
    "latch_key",
    "is_entered",
    "not_entered",
    "non_reentrant",
]
