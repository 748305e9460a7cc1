"""
devchain.gasmeter — deterministic gas metering with OOG semantics.

- Gas is charged *before* an operation takes effect.
- If the meter would exceed its limit, an OOG error is raised and nothing
  is charged.
- One meter is shared by every frame of a transaction; gas burned by a
  failing sub-call stays spent.
"""
from __future__ import annotations

from .errors import OOG, ExecError


class GasMeter:
    """
    Deterministic gas meter.

    Typical usage:
        gm = GasMeter(limit=200_000)
        gm.consume(21_000)
        gm.consume(cfg.gas.sstore_set)
        receipt.gas_used = gm.used

    Notes:
    - All values are Python ints; negative or non-int inputs raise.
    - `used` is monotonically non-decreasing.
    - `remaining` never goes below zero; OOG is raised before that.
    """

    __slots__ = ("_limit", "_used")

    def __init__(self, *, limit: int) -> None:
        self._limit = self._require_int_ge(limit, 0, "limit")
        self._used = 0

    @property
    def limit(self) -> int:
        """Configured hard limit."""
        return self._limit

    @property
    def used(self) -> int:
        """Total gas consumed so far."""
        return self._used

    @property
    def remaining(self) -> int:
        """Gas remaining before hitting the hard limit (>= 0)."""
        return self._limit - self._used

    def consume(self, amount: int) -> None:
        """Charge `amount` gas; raise OOG if this would exceed the limit."""
        amt = self._require_int_ge(amount, 0, "consume amount")
        new_used = self._used + amt
        if new_used > self._limit:
            raise OOG(
                f"OutOfGas: need {amt} (used {self._used}, limit {self._limit})",
                data={"need": amt, "used": self._used, "limit": self._limit},
            )
        self._used = new_used

    @staticmethod
    def _require_int_ge(v: int, lb: int, name: str) -> int:
        if not isinstance(v, int):
            raise ExecError(f"{name} must be int, got {type(v).__name__}")
        if v < lb:
            raise ExecError(f"{name} must be >= {lb}, got {v}")
        return v

    def __repr__(self) -> str:  # pragma: no cover
        return f"GasMeter(limit={self._limit}, used={self._used})"


__all__ = ["GasMeter"]
