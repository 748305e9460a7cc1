"""
devchain.contract — base class and method markers for devchain contracts.

A contract is a plain Python class. Instances carry nothing but their
address: every piece of state lives in host storage, reached through the
`CallContext` that the chain passes as the first argument of every method.

    from devchain.contract import Contract, external, view, payable

    class Counter(Contract):
        def constructor(self, ctx):
            ctx.storage.set(b"counter", (0).to_bytes(32, "big"))

        @external
        def inc(self, ctx):
            ...

        @view
        def get(self, ctx) -> int:
            ...

Only decorated methods are callable from outside. An override in a subclass
must repeat the decorator.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from .errors import InvalidAccess
from .gasmeter import GasMeter
from .config import GasSchedule
from .journal import Journal

_MARK = "__devchain_method__"

NONPAYABLE = "nonpayable"
PAYABLE = "payable"
VIEW = "view"
PURE = "pure"


@dataclass(frozen=True)
class MethodSpec:
    """Exported method description (name and state mutability)."""

    name: str
    mutability: str

    @property
    def readonly(self) -> bool:
        return self.mutability in (VIEW, PURE)

    @property
    def payable(self) -> bool:
        return self.mutability == PAYABLE


def _mark(fn: Callable[..., Any], mutability: str) -> Callable[..., Any]:
    setattr(fn, _MARK, mutability)
    return fn


def external(fn: Callable[..., Any]) -> Callable[..., Any]:
    """State-changing method that rejects value."""
    return _mark(fn, NONPAYABLE)


def payable(fn: Callable[..., Any]) -> Callable[..., Any]:
    """State-changing method that accepts value."""
    return _mark(fn, PAYABLE)


def view(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Read-only method; storage writes inside it are rejected."""
    return _mark(fn, VIEW)


def pure(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Method that neither reads nor writes state."""
    return _mark(fn, PURE)


class Contract:
    """Base class for devchain contracts."""

    def __init__(self, address: bytes) -> None:
        self.address = address

    def constructor(self, ctx: Any, *args: Any) -> None:
        """Runs once at deployment. Subclasses override."""
        if args:
            raise InvalidAccess(
                f"{type(self).__name__} constructor takes no arguments", op="create"
            )

    @classmethod
    def abi(cls) -> Dict[str, MethodSpec]:
        """Exported methods keyed by name (walks the class hierarchy)."""
        out: Dict[str, MethodSpec] = {}
        for name in dir(cls):
            if name.startswith("_"):
                continue
            mutability = getattr(getattr(cls, name, None), _MARK, None)
            if mutability is not None:
                out[name] = MethodSpec(name=name, mutability=mutability)
        return out

    @classmethod
    def method_spec(cls, name: str) -> Optional[MethodSpec]:
        return cls.abi().get(name)


def bind_arguments(fn: Callable[..., Any], ctx: Any, args: Sequence[Any]) -> None:
    """Reject a call whose arguments do not fit `fn`'s signature."""
    try:
        inspect.signature(fn).bind(ctx, *args)
    except TypeError as exc:
        name = getattr(fn, "__name__", "method")
        raise InvalidAccess(f"bad arguments for {name}: {exc}", op="abi") from exc


class Storage:
    """
    Byte-level storage of one contract address, metered and journaled.

    Keys and values are bytes. Missing keys read as b"" and writing b""
    deletes the slot.
    """

    __slots__ = ("_journal", "_address", "_meter", "_gas", "_readonly")

    def __init__(
        self,
        journal: Journal,
        address: bytes,
        meter: GasMeter,
        gas: GasSchedule,
        *,
        readonly: bool = False,
    ) -> None:
        self._journal = journal
        self._address = address
        self._meter = meter
        self._gas = gas
        self._readonly = readonly

    @staticmethod
    def _key(key: Any) -> bytes:
        if isinstance(key, str):
            return key.encode("utf-8")
        if not isinstance(key, (bytes, bytearray)):
            raise TypeError(f"storage key must be bytes, got {type(key).__name__}")
        return bytes(key)

    def get(self, key: bytes) -> bytes:
        self._meter.consume(self._gas.sload)
        return self._journal.storage_get(self._address, self._key(key))

    def set(self, key: bytes, value: bytes) -> None:
        if self._readonly:
            raise InvalidAccess("state change in a read-only call", op="sstore")
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"storage value must be bytes, got {type(value).__name__}")
        k = self._key(key)
        fresh = not self._journal.storage_get(self._address, k)
        self._meter.consume(self._gas.sstore_set if fresh and value else self._gas.sstore_reset)
        self._journal.storage_set(self._address, k, bytes(value))

    def delete(self, key: bytes) -> None:
        self.set(key, b"")


__all__ = [
    "NONPAYABLE",
    "PAYABLE",
    "VIEW",
    "PURE",
    "MethodSpec",
    "external",
    "payable",
    "view",
    "pure",
    "Contract",
    "bind_arguments",
    "Storage",
]
