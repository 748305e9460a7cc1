"""
devchain.context — BlockEnv/TxEnv passed to contracts (deterministic)

These lightweight environments are handed to contract code through the call
context so contracts can read chain/transaction metadata in a *deterministic*
way. They contain only pure data (ints/bytes) and perform strict validation.

Design notes
------------
- Addresses are raw 20-byte values. Hex strings (with or without "0x") are
  accepted by helpers and normalized to bytes.
- All numeric fields are validated to be non-negative.
- `timestamp` is the block timestamp chosen by the devchain clock, never
  the wall clock.
- `gas_price` on TxEnv is the per-call fee signal that gas-price gates
  compare against.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Union

ADDRESS_LEN = 20
ZERO_ADDRESS = b"\x00" * ADDRESS_LEN


# ----------------------------- helpers ----------------------------- #

class ContextError(Exception):
    """Validation or coercion failure for BlockEnv/TxEnv and addresses."""


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def to_address(value: Any) -> bytes:
    """
    Normalize an address-like value (20 raw bytes, 0x-hex string, or an object
    exposing an ``address`` attribute such as a ContractHandle) to 20 bytes.
    """
    inner = getattr(value, "address", None)
    if inner is not None and not isinstance(value, (bytes, bytearray, str)):
        value = inner
    b = to_bytes(value)
    if len(b) != ADDRESS_LEN:
        raise ContextError(f"address must be {ADDRESS_LEN} bytes, got {len(b)}")
    return b


def _require_non_negative_int(name: str, v: Any) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContextError(f"{name} must be int, got {type(v).__name__}")
    if v < 0:
        raise ContextError(f"{name} must be non-negative, got {v}")
    return v


# ----------------------------- models ------------------------------ #

@dataclass(frozen=True)
class BlockEnv:
    """
    Deterministic per-block environment passed to contracts.

    Fields
    ------
    height:     Block height (genesis is 0).
    timestamp:  Block timestamp in seconds.
    coinbase:   Block producer address as raw bytes.
    chain_id:   Integer chain identifier.
    """
    height: int
    timestamp: int
    coinbase: bytes
    chain_id: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "height", _require_non_negative_int("height", self.height))
        object.__setattr__(self, "timestamp", _require_non_negative_int("timestamp", self.timestamp))
        object.__setattr__(self, "chain_id", _require_non_negative_int("chain_id", self.chain_id))
        object.__setattr__(self, "coinbase", to_address(self.coinbase))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["coinbase"] = to_hex(self.coinbase)
        return d


@dataclass(frozen=True)
class TxEnv:
    """
    Deterministic per-transaction environment passed to contracts.

    Fields
    ------
    tx_hash:   Transaction hash bytes (derived deterministically by the chain).
    origin:    Externally-owned account that signed the transaction.
    gas_price: Price per gas unit offered by the transaction (wei).
    gas_limit: Gas limit available to the whole transaction.
    nonce:     Origin nonce.
    """
    tx_hash: bytes
    origin: bytes
    gas_price: int
    gas_limit: int
    nonce: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "tx_hash", to_bytes(self.tx_hash))
        object.__setattr__(self, "origin", to_address(self.origin))
        object.__setattr__(self, "gas_price", _require_non_negative_int("gas_price", self.gas_price))
        object.__setattr__(self, "gas_limit", _require_non_negative_int("gas_limit", self.gas_limit))
        object.__setattr__(self, "nonce", _require_non_negative_int("nonce", self.nonce))

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["tx_hash"] = to_hex(self.tx_hash)
        d["origin"] = to_hex(self.origin)
        return d


__all__ = [
    "ADDRESS_LEN",
    "ZERO_ADDRESS",
    "ContextError",
    "to_bytes",
    "to_hex",
    "to_address",
    "BlockEnv",
    "TxEnv",
]
