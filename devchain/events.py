from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .errors import InvalidAccess

# Basic bounds (kept generous; contracts only need to pass validation).
MAX_EVENT_NAME_LEN = 64
MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 256

# Event names are CamelCase identifiers; keys are identifier-like.
_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Event:
    """An event emitted by a contract during a call."""

    address: bytes
    name: str
    args: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": "0x" + self.address.hex(),
            "name": self.name,
            "args": {k: ("0x" + v.hex() if isinstance(v, bytes) else v) for k, v in self.args.items()},
        }


def _check_name(name: Any) -> str:
    if isinstance(name, (bytes, bytearray)):
        name = bytes(name).decode("ascii", errors="replace")
    if not isinstance(name, str) or not name:
        raise InvalidAccess("event name must be a non-empty str", op="emit")
    if len(name) > MAX_EVENT_NAME_LEN or not _NAME_RE.match(name):
        raise InvalidAccess("event name is invalid", op="emit", data={"name": name})
    return name


def _check_key(key: Any) -> str:
    if isinstance(key, (bytes, bytearray)):
        key = bytes(key).decode("ascii", errors="replace")
    if not isinstance(key, str) or not key or len(key) > MAX_KEY_LEN or not _KEY_RE.match(key):
        raise InvalidAccess("event key is invalid", op="emit", data={"key": repr(key)})
    return key


def _check_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        b = bytes(value)
        if len(b) > MAX_BYTES_LEN:
            raise InvalidAccess("event bytes arg too long", op="emit", data={"len": len(b)})
        return b
    if isinstance(value, bool):
        # bool is a subclass of int, so check it before int.
        return value
    if isinstance(value, int):
        if value < 0 or value.bit_length() > MAX_INT_BITS:
            raise InvalidAccess("event int arg out of uint256 range", op="emit")
        return value
    if isinstance(value, str):
        if len(value) > MAX_BYTES_LEN:
            raise InvalidAccess("event str arg too long", op="emit")
        return value
    raise InvalidAccess(
        f"unsupported event arg type {type(value).__name__}", op="emit"
    )


def make_event(address: bytes, name: Any, args: Mapping[Any, Any]) -> Event:
    """Validate and build an Event. Keys may be bytes or str."""
    checked = {_check_key(k): _check_value(v) for k, v in args.items()}
    return Event(address=bytes(address), name=_check_name(name), args=checked)


__all__ = ["Event", "make_event"]
