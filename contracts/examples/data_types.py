# -*- coding: utf-8 -*-
"""
DataTypesDemo

State variables of every basic type, left unset so each getter shows its
type's default: 0 for integers, False for bools, the zero address, zero-filled
fixed bytes, and "" / b"" for dynamic types. Only ``is_active`` is set (to
True) at deployment.

Public ABI:
- my_bool(), is_active()
- my_uint8() .. my_uint256(), my_uint()
- my_int8() .. my_int256(), my_int()
- my_address(), my_payable_address()
- my_bytes1(), my_bytes8(), my_bytes16(), my_bytes32()
- my_string(), my_dynamic_bytes()
- demonstrate_arrays()        push 100 and 200 onto my_array, set
                              fixed_array[0] = 10 and fixed_array[1] = 20
- my_array(i), my_array_length(), fixed_array(i)

Out-of-range array indices revert with Panic(0x32).
"""
from __future__ import annotations

from typing import Any, Callable

from devchain.context import ZERO_ADDRESS
from devchain.contract import Contract, external, view
from devchain.errors import PANIC_INDEX_OOB, Revert

from contracts.stdlib.utils.codec import (
    decode_address,
    decode_bool,
    decode_str,
    decode_uint,
    encode_bool,
    encode_uint,
    slot,
)
from contracts.stdlib.utils.collections import StorageArray

FIXED_ARRAY_LEN = 5

KEY_PREFIX = b"dt:"
KEY_MY_ARRAY = KEY_PREFIX + b"my_array"
KEY_FIXED_ARRAY = KEY_PREFIX + b"fixed_array"


def _decode_int(raw: bytes) -> int:
    return int.from_bytes(raw, "big", signed=True) if raw else 0


def _decode_address(raw: bytes) -> bytes:
    return decode_address(raw) or ZERO_ADDRESS


def _fixed_bytes(width: int) -> Callable[[bytes], bytes]:
    def decode(raw: bytes) -> bytes:
        return raw.rjust(width, b"\x00")

    return decode


def _state_var(name: str, decode: Callable[[bytes], Any]) -> Callable[..., Any]:
    """Exported read-only getter for the storage slot ``dt:<name>``."""
    key = KEY_PREFIX + name.encode("ascii")

    def getter(self: Contract, ctx: Any) -> Any:
        return decode(ctx.storage.get(key))

    getter.__name__ = getter.__qualname__ = name
    return view(getter)


def _my_array(ctx: Any) -> StorageArray[int]:
    return StorageArray(ctx, KEY_MY_ARRAY, encode_uint, decode_uint)


def _fixed_key(index: Any) -> bytes:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < FIXED_ARRAY_LEN:
        raise Revert.panic(PANIC_INDEX_OOB)
    return slot(KEY_FIXED_ARRAY, index)


class DataTypesDemo(Contract):
    def constructor(self, ctx: Any) -> None:
        ctx.storage.set(KEY_PREFIX + b"is_active", encode_bool(True))

    # --- booleans ---
    my_bool = _state_var("my_bool", decode_bool)
    is_active = _state_var("is_active", decode_bool)

    # --- unsigned integers ---
    my_uint8 = _state_var("my_uint8", decode_uint)
    my_uint16 = _state_var("my_uint16", decode_uint)
    my_uint32 = _state_var("my_uint32", decode_uint)
    my_uint64 = _state_var("my_uint64", decode_uint)
    my_uint128 = _state_var("my_uint128", decode_uint)
    my_uint256 = _state_var("my_uint256", decode_uint)
    my_uint = _state_var("my_uint", decode_uint)

    # --- signed integers ---
    my_int8 = _state_var("my_int8", _decode_int)
    my_int16 = _state_var("my_int16", _decode_int)
    my_int32 = _state_var("my_int32", _decode_int)
    my_int64 = _state_var("my_int64", _decode_int)
    my_int128 = _state_var("my_int128", _decode_int)
    my_int256 = _state_var("my_int256", _decode_int)
    my_int = _state_var("my_int", _decode_int)

    # --- addresses ---
    my_address = _state_var("my_address", _decode_address)
    my_payable_address = _state_var("my_payable_address", _decode_address)

    # --- fixed-size bytes ---
    my_bytes1 = _state_var("my_bytes1", _fixed_bytes(1))
    my_bytes8 = _state_var("my_bytes8", _fixed_bytes(8))
    my_bytes16 = _state_var("my_bytes16", _fixed_bytes(16))
    my_bytes32 = _state_var("my_bytes32", _fixed_bytes(32))

    # --- dynamic types ---
    my_string = _state_var("my_string", decode_str)
    my_dynamic_bytes = _state_var("my_dynamic_bytes", bytes)

    # ------------------------------------------------------------------ #
    # Arrays
    # ------------------------------------------------------------------ #

    @external
    def demonstrate_arrays(self, ctx: Any) -> None:
        arr = _my_array(ctx)
        arr.append(100)
        arr.append(200)
        ctx.storage.set(_fixed_key(0), encode_uint(10))
        ctx.storage.set(_fixed_key(1), encode_uint(20))

    @view
    def my_array(self, ctx: Any, index: int) -> int:
        return _my_array(ctx).get(index)

    @view
    def my_array_length(self, ctx: Any) -> int:
        return len(_my_array(ctx))

    @view
    def fixed_array(self, ctx: Any, index: int) -> int:
        return decode_uint(ctx.storage.get(_fixed_key(index)))
