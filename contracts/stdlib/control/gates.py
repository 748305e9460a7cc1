# -*- coding: utf-8 -*-
"""
contracts.stdlib.control.gates
==============================

Ordered predicate chains ("modifiers") for contract methods.

Each constructor below returns a :data:`Gate`. Gates read only the call
context and storage; none of them write state, so evaluating a chain has
no side effect beyond gas.

    enforce(
        ctx,
        status_is(read_status, ACTIVE),
        at_most(number, MAX_NUMBER),
        caller_allowed(lambda c, who: ...),
    )

Evaluation stops at the first failing gate.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from devchain.errors import Revert

Gate = Callable[[Any], Optional[Revert]]


def first_failure(ctx: Any, gates: Iterable[Gate]) -> Optional[Revert]:
    """Evaluate `gates` in order; return the first error or None."""
    for gate in gates:
        failure = gate(ctx)
        if failure is not None:
            return failure
    return None


def enforce(ctx: Any, *gates: Gate) -> None:
    """Raise the first failing gate's error."""
    failure = first_failure(ctx, gates)
    if failure is not None:
        raise failure


# ---------------------------------------------------------------------------
# Gate constructors
# ---------------------------------------------------------------------------

def status_is(read_status: Callable[[Any], int], expected: int, *, error: str = "InvalidStatus") -> Gate:
    def check(ctx: Any) -> Optional[Revert]:
        if read_status(ctx) == expected:
            return None
        return Revert.custom(error)

    return check


def at_most(value: int, limit: int, *, error: str = "NumberTooLarge") -> Gate:
    """Fails with ``error(value)`` when value > limit."""

    def check(ctx: Any) -> Optional[Revert]:
        if value <= limit:
            return None
        return Revert.custom(error, value)

    return check


def caller_allowed(allowed: Callable[[Any, bytes], bool], *, reason: str = "not authorized") -> Gate:
    """Fails with a reason-string revert unless ``allowed(ctx, ctx.sender)``."""

    def check(ctx: Any) -> Optional[Revert]:
        if allowed(ctx, ctx.sender):
            return None
        return Revert.error(reason)

    return check


def not_before(earliest: Callable[[Any], int], *, reason: str = "too early") -> Gate:
    """Fails until the block timestamp reaches ``earliest(ctx)``."""

    def check(ctx: Any) -> Optional[Revert]:
        if ctx.block.timestamp >= earliest(ctx):
            return None
        return Revert.error(reason)

    return check


def gas_price_at_most(ceiling: Callable[[Any], int], *, error: str = "GasPriceTooHigh") -> Gate:
    """Fails with ``error(gas_price, ceiling)`` when the tx gas price is above the ceiling."""

    def check(ctx: Any) -> Optional[Revert]:
        limit = ceiling(ctx)
        if ctx.tx.gas_price <= limit:
            return None
        return Revert.custom(error, ctx.tx.gas_price, limit)

    return check


__all__ = [
    "Gate",
    "first_failure",
    "enforce",
    "status_is",
    "at_most",
    "caller_allowed",
    "not_before",
    "gas_price_at_most",
]
