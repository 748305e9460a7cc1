# -*- coding: utf-8 -*-
"""
contracts.stdlib.utils.collections
==================================

Storage-backed dynamic array and mapping.

Both views are *stateless*: they hold the call context, a name prefix and
an encoder/decoder pair, and read or write ``ctx.storage`` on every access.
Create them per call, e.g. inside a contract method:

    funders = StorageArray(ctx, b"funders", encode_address, decode_address)
    funders.append(ctx.sender)

Layout
------
- array length:  ``slot(name)``         (uint256)
- array item i:  ``slot(name, i)``
- mapping entry: ``slot(name, key)``

Out-of-range array access reverts with ``Panic(0x32)``, the same failure a
Solidity array index raises.
"""
from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, TypeVar

from devchain.errors import PANIC_INDEX_OOB, Revert

from .codec import KeyPart, decode_uint, encode_uint, slot

T = TypeVar("T")

Encoder = Callable[[Any], bytes]
Decoder = Callable[[bytes], Any]


class StorageArray(Generic[T]):
    """Append-only-ish array (supports set, pop and clear)."""

    def __init__(self, ctx: Any, name: bytes, encode: Encoder, decode: Decoder) -> None:
        self._ctx = ctx
        self._name = name
        self._encode = encode
        self._decode = decode

    def __len__(self) -> int:
        return decode_uint(self._ctx.storage.get(slot(self._name)))

    def _check(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise Revert.panic(PANIC_INDEX_OOB)
        if index < 0 or index >= len(self):
            raise Revert.panic(PANIC_INDEX_OOB)
        return index

    def get(self, index: int) -> T:
        i = self._check(index)
        return self._decode(self._ctx.storage.get(slot(self._name, i)))

    def set(self, index: int, value: T) -> None:
        i = self._check(index)
        self._ctx.storage.set(slot(self._name, i), self._encode(value))

    def append(self, value: T) -> int:
        """Push `value`; returns its index."""
        n = len(self)
        self._ctx.storage.set(slot(self._name, n), self._encode(value))
        self._ctx.storage.set(slot(self._name), encode_uint(n + 1))
        return n

    def pop(self) -> T:
        n = len(self)
        if n == 0:
            raise Revert.panic(PANIC_INDEX_OOB)
        key = slot(self._name, n - 1)
        value = self._decode(self._ctx.storage.get(key))
        self._ctx.storage.delete(key)
        self._ctx.storage.set(slot(self._name), encode_uint(n - 1))
        return value

    def clear(self) -> None:
        """Delete every item and reset the length to 0."""
        n = len(self)
        for i in range(n):
            self._ctx.storage.delete(slot(self._name, i))
        self._ctx.storage.delete(slot(self._name))

    def __iter__(self) -> Iterator[T]:
        for i in range(len(self)):
            yield self._decode(self._ctx.storage.get(slot(self._name, i)))


class StorageMap(Generic[T]):
    """Mapping with a default for absent keys (like a Solidity mapping)."""

    def __init__(self, ctx: Any, name: bytes, encode: Encoder, decode: Decoder) -> None:
        self._ctx = ctx
        self._name = name
        self._encode = encode
        self._decode = decode

    def get(self, key: KeyPart) -> T:
        return self._decode(self._ctx.storage.get(slot(self._name, key)))

    def set(self, key: KeyPart, value: T) -> None:
        self._ctx.storage.set(slot(self._name, key), self._encode(value))

    def delete(self, key: KeyPart) -> None:
        self._ctx.storage.delete(slot(self._name, key))


__all__ = ["StorageArray", "StorageMap"]
