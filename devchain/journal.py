"""
devchain.journal — journaling writes, checkpoints, revert/commit.

This module provides a deterministic, in-memory write journal layered over a
`WorldState` (balances, nonces, deployed code, per-address storage). It
supports nested checkpoints via a stack of overlays. Writes go to the top
overlay; reads consult overlays from top → base. `commit()` merges the top
overlay into the next layer (or the base state if it's the last layer).
`revert()` discards the top overlay.

Every call frame opens one checkpoint, so a failing frame discards exactly
its own effects (and those of its sub-frames) while the caller's staged
writes survive.

Intended usage
--------------
    j = Journal(world)
    j.begin()                       # start a checkpoint
    j.storage_set(addr, key, b"value")
    j.add_balance(addr, 10)
    j.commit()                      # apply to parent/base

Notes
-----
- This journal does not enforce economic rules beyond non-negative balances;
  callers perform validation/charging before writes.
- An empty storage value is a deletion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .events import Event


def _b(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


# =============================================================================
# Base state
# =============================================================================


@dataclass
class WorldState:
    """Persisted (committed) state of the devchain."""

    balances: Dict[bytes, int] = field(default_factory=dict)
    nonces: Dict[bytes, int] = field(default_factory=dict)
    code: Dict[bytes, Any] = field(default_factory=dict)
    storage: Dict[bytes, Dict[bytes, bytes]] = field(default_factory=dict)

    def copy(self) -> "WorldState":
        return WorldState(
            balances=dict(self.balances),
            nonces=dict(self.nonces),
            code=dict(self.code),
            storage={a: dict(m) for a, m in self.storage.items()},
        )


# =============================================================================
# Overlay model
# =============================================================================


@dataclass
class _Overlay:
    """
    A single journal layer.

    - `balances` / `nonces` / `code`: values written in this layer.
    - `storage`: staged storage changes. `None` means deletion for that key.
    - `events`: events emitted by frames that committed into this layer.
    """

    balances: Dict[bytes, int] = field(default_factory=dict)
    nonces: Dict[bytes, int] = field(default_factory=dict)
    code: Dict[bytes, Any] = field(default_factory=dict)
    storage: Dict[bytes, Dict[bytes, Optional[bytes]]] = field(default_factory=dict)
    events: List[Event] = field(default_factory=list)

    def storage_set_local(self, addr: bytes, key: bytes, value: Optional[bytes]) -> None:
        m = self.storage.get(addr)
        if m is None:
            m = {}
            self.storage[addr] = m
        m[key] = value


# =============================================================================
# Journal
# =============================================================================


class Journal:
    """
    A copy-on-write write journal with nested checkpoints.

    API highlights
    --------------
    - begin() / commit() / revert()
    - storage_get(), storage_set(), storage_delete(), storage_items()
    - balance_of(), set_balance(), add_balance(), sub_balance()
    - nonce_of(), bump_nonce(), code_at(), set_code()
    - emit(), events()
    """

    def __init__(self, world: WorldState) -> None:
        self._world = world
        self._layers: List[_Overlay] = [_Overlay()]

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of overlays (>= 1)."""
        return len(self._layers)

    def begin(self) -> int:
        """Start a new checkpoint. Returns the new depth marker (int)."""
        self._layers.append(_Overlay())
        return len(self._layers)

    def commit(self) -> None:
        """
        Commit the top overlay into its parent, or into the base state when
        only the root layer remains.
        """
        top = self._layers.pop()
        if self._layers:
            self._merge_layers(self._layers[-1], top)
            return
        self._apply_to_base(top)
        self._layers.append(_Overlay())

    def revert(self) -> None:
        """Discard the top overlay (or clear it if it's the root)."""
        if len(self._layers) > 1:
            self._layers.pop()
        else:
            self._layers[0] = _Overlay()

    # --------------------------------------------------------------------- #
    # Accounts
    # --------------------------------------------------------------------- #

    def balance_of(self, address: bytes) -> int:
        addr = _b(address, name="address")
        for layer in reversed(self._layers):
            if addr in layer.balances:
                return layer.balances[addr]
        return self._world.balances.get(addr, 0)

    def set_balance(self, address: bytes, amount: int) -> None:
        if amount < 0:
            raise ValueError("balance must be non-negative")
        self._layers[-1].balances[_b(address, name="address")] = int(amount)

    def add_balance(self, address: bytes, amount: int) -> None:
        self.set_balance(address, self.balance_of(address) + amount)

    def sub_balance(self, address: bytes, amount: int) -> None:
        self.set_balance(address, self.balance_of(address) - amount)

    def nonce_of(self, address: bytes) -> int:
        addr = _b(address, name="address")
        for layer in reversed(self._layers):
            if addr in layer.nonces:
                return layer.nonces[addr]
        return self._world.nonces.get(addr, 0)

    def bump_nonce(self, address: bytes) -> int:
        """Increment the nonce and return the value it had before."""
        cur = self.nonce_of(address)
        self._layers[-1].nonces[_b(address, name="address")] = cur + 1
        return cur

    def code_at(self, address: bytes) -> Optional[Any]:
        addr = _b(address, name="address")
        for layer in reversed(self._layers):
            if addr in layer.code:
                return layer.code[addr]
        return self._world.code.get(addr)

    def set_code(self, address: bytes, code: Any) -> None:
        self._layers[-1].code[_b(address, name="address")] = code

    # --------------------------------------------------------------------- #
    # Storage API
    # --------------------------------------------------------------------- #

    def storage_get(self, address: bytes, key: bytes, default: bytes = b"") -> bytes:
        """Read storage with overlay precedence. Returns `default` if absent."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        for layer in reversed(self._layers):
            m = layer.storage.get(addr)
            if m is not None and key_b in m:
                local = m[key_b]
                return default if local is None else local
        return self._world.storage.get(addr, {}).get(key_b, default)

    def storage_set(self, address: bytes, key: bytes, value: bytes) -> None:
        """Stage a storage write in the top overlay. Empty value is a deletion."""
        addr = _b(address, name="address")
        key_b = _b(key, name="key")
        val_b = _b(value, name="value")
        self._layers[-1].storage_set_local(addr, key_b, val_b if val_b else None)

    def storage_delete(self, address: bytes, key: bytes) -> None:
        """Explicit storage deletion in the top overlay."""
        self._layers[-1].storage_set_local(
            _b(address, name="address"), _b(key, name="key"), None
        )

    def storage_items(self, address: bytes) -> Iterator[Tuple[bytes, bytes]]:
        """
        Iterate visible (key, value) for an address with overlay precedence.
        Stable order by key.
        """
        addr = _b(address, name="address")
        visible: Dict[bytes, bytes] = dict(self._world.storage.get(addr, {}))
        for layer in self._layers:
            m = layer.storage.get(addr)
            if not m:
                continue
            for k, v in m.items():
                if v is None:
                    visible.pop(k, None)
                else:
                    visible[k] = v
        for k in sorted(visible.keys()):
            yield k, visible[k]

    # --------------------------------------------------------------------- #
    # Events
    # --------------------------------------------------------------------- #

    def emit(self, event: Event) -> None:
        self._layers[-1].events.append(event)

    def events(self) -> List[Event]:
        """Events staged in every layer, in emission order."""
        out: List[Event] = []
        for layer in self._layers:
            out.extend(layer.events)
        return out

    # --------------------------------------------------------------------- #
    # Internal merge/apply
    # --------------------------------------------------------------------- #

    @staticmethod
    def _merge_layers(dst: _Overlay, src: _Overlay) -> None:
        dst.balances.update(src.balances)
        dst.nonces.update(src.nonces)
        dst.code.update(src.code)
        for addr, writes in src.storage.items():
            dm = dst.storage.get(addr)
            if dm is None:
                dm = {}
                dst.storage[addr] = dm
            dm.update(writes)
        dst.events.extend(src.events)

    def _apply_to_base(self, layer: _Overlay) -> None:
        w = self._world
        w.balances.update(layer.balances)
        w.nonces.update(layer.nonces)
        w.code.update(layer.code)
        for addr, writes in layer.storage.items():
            slots = w.storage.setdefault(addr, {})
            for k, v in writes.items():
                if v is None:
                    slots.pop(k, None)
                else:
                    slots[k] = v


__all__ = ["WorldState", "Journal"]
