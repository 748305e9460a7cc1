"""
devchain.errors — execution errors raised by the devchain host and contracts.

Failures are communicated via *typed exceptions*. The host converts them into
failed receipts (status 0) for transactions, or re-raises them for read-only
calls and deployments.

Hierarchy
---------
ExecError (base)
 ├─ OOG            : Out-of-gas during execution
 ├─ Revert         : Contract-triggered revert (custom error kind or reason string)
 └─ InvalidAccess  : Illegal call shape (unknown method, value to non-payable,
                     call depth exceeded, malformed address)

Notes
-----
* `Revert` and `OOG` are *semantic* failures of a call, not host bugs. Both
  discard every effect of the failing frame.
* A `Revert` is identified by its `kind`: the custom error name
  (e.g. ``"NumberTooLarge"``) or ``"Error"`` for plain reason strings such as
  ``"not authorized"``. `Panic` carries a numeric `code` in `params`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Panic codes (same numbering as the EVM's Panic(uint256))
PANIC_ARITHMETIC = 0x11
PANIC_DIV_ZERO = 0x12
PANIC_INDEX_OOB = 0x32


@dataclass
class ExecError(Exception):
    """
    Base execution error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'OUT_OF_GAS', 'REVERT').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "execution error"
    code: str = "EXEC_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:  # pragma: no cover - trivial
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts/logs/CLI output."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class OOG(ExecError):
    """
    Out-of-gas during execution.

    Raised by the GasMeter when a charge would exceed the call's gas limit.
    """
    def __init__(self, message: str = "out of gas", *, data: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="OUT_OF_GAS", data=data)


class Revert(ExecError):
    """
    Contract-triggered revert.

    Fields:
        kind:   custom error name, ``"Error"`` for reason strings, ``"Panic"``.
        reason: the reason string for ``"Error"`` reverts (None otherwise).
        params: positional payload of a custom error (e.g. the offending number).

    Usage:
        raise Revert.error("too early")
        raise Revert.custom("NumberTooLarge", number)
    """
    def __init__(
        self,
        message: str = "reverted",
        *,
        kind: str = "Error",
        reason: Optional[str] = None,
        params: Tuple[Any, ...] = (),
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {"kind": kind}
        if data:
            d.update(data)
        if reason is not None:
            d.setdefault("reason", reason)
        if params:
            d.setdefault("params", [_jsonable(p) for p in params])
        super().__init__(message=message, code="REVERT", data=d)
        self.kind = kind
        self.reason = reason
        self.params = tuple(params)

    @classmethod
    def error(cls, reason: str) -> "Revert":
        """Plain reason-string revert (Solidity-style ``require(cond, reason)``)."""
        return cls(reason, kind="Error", reason=reason)

    @classmethod
    def custom(cls, kind: str, *args: Any) -> "Revert":
        """Named custom error with an optional positional payload."""
        rendered = ", ".join(repr(_jsonable(a)) for a in args)
        return cls(f"{kind}({rendered})", kind=kind, params=args)

    @classmethod
    def panic(cls, code: int) -> "Revert":
        return cls(f"Panic(0x{code:02x})", kind="Panic", params=(code,))

    @property
    def panic_code(self) -> Optional[int]:
        if self.kind != "Panic" or not self.params:
            return None
        return int(self.params[0])


class InvalidAccess(ExecError):
    """
    Illegal access or forbidden operation under the host's rules.

    Examples:
      - Calling a method the contract does not export
      - Sending value to a non-payable method
      - Exceeding the maximum call depth
    """
    def __init__(
        self,
        message: str = "invalid access",
        *,
        op: Optional[str] = None,
        address: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {}
        if data:
            d.update(data)
        if op is not None:
            d.setdefault("op", op)
        if address is not None:
            d.setdefault("address", address)
        super().__init__(message=message, code="INVALID_ACCESS", data=d or None)


def _jsonable(v: Any) -> Any:
    if isinstance(v, (bytes, bytearray)):
        return "0x" + bytes(v).hex()
    return v


def failure_fields(err: ExecError) -> Dict[str, Any]:
    """
    Compact description of a failed call for receipts and demo output.

    ``error`` is the revert kind (``"NumberTooLarge"``, ``"Error"``, ``"Panic"``)
    or the error code for non-revert failures (``"OUT_OF_GAS"``,
    ``"INVALID_ACCESS"``). ``reason`` and ``params`` appear only when set.
    """
    if not isinstance(err, Revert):
        return {"error": err.code, "message": err.message}
    out: Dict[str, Any] = {"error": err.kind}
    if err.reason is not None:
        out["reason"] = err.reason
    if err.params:
        out["params"] = [_jsonable(p) for p in err.params]
    return out


__all__ = [
    "PANIC_ARITHMETIC",
    "PANIC_DIV_ZERO",
    "PANIC_INDEX_OOB",
    "ExecError",
    "OOG",
    "Revert",
    "InvalidAccess",
    "failure_fields",
]
