"""Fixtures for host-level tests: a fresh chain and tiny purpose-built contracts."""
from __future__ import annotations

from typing import Any

import pytest

from devchain.chain import DevChain
from devchain.config import load_config
from devchain.contract import Contract, external, payable, view
from devchain.errors import Revert

COUNTER = b"counter"


def _read(ctx: Any) -> int:
    raw = ctx.storage.get(COUNTER)
    return int.from_bytes(raw, "big") if raw else 0


class Counter(Contract):
    """Stores an int, can fail after writing, and can call other contracts."""

    def constructor(self, ctx: Any, start: int = 0) -> None:
        if start:
            ctx.storage.set(COUNTER, start.to_bytes(32, "big"))

    @external
    def inc(self, ctx: Any, by: int = 1) -> int:
        value = _read(ctx) + by
        ctx.storage.set(COUNTER, value.to_bytes(32, "big"))
        ctx.emit("Inc", {"by": by, "value": value})
        return value

    @external
    def inc_then_fail(self, ctx: Any) -> None:
        self.inc(ctx)
        raise Revert.error("boom")

    @external
    def call_inc(self, ctx: Any, target: bytes, swallow: bool = False) -> int:
        """Bump the local counter, then bump `target` (optionally swallowing its revert)."""
        self.inc(ctx)
        try:
            ctx.call(target, "inc_then_fail")
        except Revert:
            if not swallow:
                raise
        return _read(ctx)

    @external
    def recurse(self, ctx: Any) -> None:
        ctx.call(ctx.this, "recurse")

    @external
    def write_in_view(self, ctx: Any) -> int:
        return ctx.call(ctx.this, "sneaky_write")

    @view
    def sneaky_write(self, ctx: Any) -> int:
        ctx.storage.set(COUNTER, b"\x01")
        return 1

    @view
    def get(self, ctx: Any) -> int:
        return _read(ctx)

    @view
    def sender(self, ctx: Any) -> bytes:
        return ctx.sender

    @view
    def timestamp(self, ctx: Any) -> int:
        return ctx.block.timestamp


class Vault(Contract):
    """Accepts value and forwards it."""

    @payable
    def deposit(self, ctx: Any) -> int:
        return ctx.value

    @payable
    def receive(self, ctx: Any) -> None:
        ctx.emit("Received", {"from": ctx.sender, "amount": ctx.value})

    @external
    def send(self, ctx: Any, to: bytes, amount: int) -> None:
        ctx.transfer(to, amount)

    @external
    def spawn(self, ctx: Any) -> bytes:
        return ctx.create(Counter, 7)


@pytest.fixture()
def chain() -> DevChain:
    return DevChain(load_config())


@pytest.fixture()
def counter(chain: DevChain):
    return chain.deploy(Counter)


@pytest.fixture()
def vault(chain: DevChain):
    return chain.deploy(Vault)
