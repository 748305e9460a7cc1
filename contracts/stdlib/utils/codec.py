# -*- coding: utf-8 -*-
"""
contracts.stdlib.utils.codec
============================

Canonical byte encodings for values kept in contract storage.

Conventions:
- uint256 values are stored as exactly 32 big-endian bytes. Zero is stored as
  *absent* (empty bytes), so an unset slot reads back as 0 and writing 0
  frees the slot.
- Booleans: ``b"\\x01"`` for True, absent for False.
- Addresses: 20 raw bytes; absent reads back as None.
- Strings: UTF-8 bytes; absent reads back as "".

Slot keys are built with :func:`slot`, which joins ``bytes``/``str``/``int``
parts with ``b":"``. Integers in keys are rendered as 32-byte big-endian so
array indices never collide with each other.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from devchain.context import ContextError, to_address
from devchain.errors import InvalidAccess, Revert

U256_BYTES = 32
ADDRESS_BYTES = 20

KeyPart = Union[bytes, bytearray, str, int]


class CodecError(ValueError):
    """Raised when a stored value has an unexpected shape."""


def slot(*parts: KeyPart) -> bytes:
    """
    Build a storage key from parts.

    >>> slot(b"people", 3) == b"people:" + (3).to_bytes(32, "big")
    True
    """
    out = []
    for p in parts:
        if isinstance(p, bool):
            raise CodecError("bool is not a valid key part")
        if isinstance(p, int):
            out.append(p.to_bytes(U256_BYTES, "big"))
        elif isinstance(p, str):
            out.append(p.encode("utf-8"))
        elif isinstance(p, (bytes, bytearray)):
            out.append(bytes(p))
        else:
            raise CodecError(f"unsupported key part {type(p).__name__}")
    return b":".join(out)


# --- uint256 -----------------------------------------------------------------


def encode_uint(n: int) -> bytes:
    if isinstance(n, bool) or not isinstance(n, int):
        raise CodecError(f"uint expected, got {type(n).__name__}")
    if n < 0 or n.bit_length() > 256:
        # A value that escaped checked math must never reach storage.
        raise Revert.error("uint256 out of range")
    return b"" if n == 0 else n.to_bytes(U256_BYTES, "big")


def decode_uint(raw: bytes) -> int:
    if not raw:
        return 0
    if len(raw) != U256_BYTES:
        raise CodecError(f"stored uint must be {U256_BYTES} bytes, got {len(raw)}")
    return int.from_bytes(raw, "big")


# --- bool ---------------------------------------------------------------------


def encode_bool(flag: bool) -> bytes:
    return b"\x01" if flag else b""


def decode_bool(raw: bytes) -> bool:
    return raw == b"\x01"


# --- address ------------------------------------------------------------------


def encode_address(addr: Optional[bytes]) -> bytes:
    if addr is None:
        return b""
    if not isinstance(addr, (bytes, bytearray)) or len(addr) != ADDRESS_BYTES:
        raise CodecError(f"address must be {ADDRESS_BYTES} bytes")
    return bytes(addr)


def decode_address(raw: bytes) -> Optional[bytes]:
    if not raw:
        return None
    if len(raw) != ADDRESS_BYTES:
        raise CodecError(f"stored address must be {ADDRESS_BYTES} bytes, got {len(raw)}")
    return bytes(raw)


def as_address(value: Any) -> bytes:
    """Normalize a call argument to a 20-byte address; reject anything else."""
    try:
        return to_address(value)
    except ContextError as exc:
        raise InvalidAccess(f"bad address argument: {exc}", op="abi") from exc


# --- str ----------------------------------------------------------------------


def encode_str(s: str) -> bytes:
    if not isinstance(s, str):
        raise CodecError(f"str expected, got {type(s).__name__}")
    return s.encode("utf-8")


def decode_str(raw: bytes) -> str:
    return raw.decode("utf-8") if raw else ""


__all__ = [
    "CodecError",
    "slot",
    "encode_uint",
    "decode_uint",
    "encode_bool",
    "decode_bool",
    "encode_address",
    "decode_address",
    "as_address",
    "encode_str",
    "decode_str",
]
