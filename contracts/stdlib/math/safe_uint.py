# -*- coding: utf-8 -*-
"""
contracts.stdlib.math.safe_uint
===============================

Checked unsigned-integer helpers for devchain contracts.

Goals
-----
- **U256**-oriented arithmetic that never uses Python floats.
- Checked semantics: overflow/underflow revert with ``Panic(0x11)``,
  division by zero with ``Panic(0x12)`` (the numbering Solidity uses, so
  tests can assert on the panic code).
- Argument domain checks: values outside 0..U256_MAX, negative numbers,
  bools and non-ints are rejected before any arithmetic happens.
"""

from __future__ import annotations

from typing import Any, Final, Tuple

from devchain.errors import PANIC_ARITHMETIC, PANIC_DIV_ZERO, Revert

U8_MAX: Final[int] = (1 << 8) - 1
U16_MAX: Final[int] = (1 << 16) - 1
U32_MAX: Final[int] = (1 << 32) - 1
U256_MAX: Final[int] = (1 << 256) - 1


# ---------------------------------------------------------------------------
# Domain guards
# ---------------------------------------------------------------------------

def is_uint256(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= U256_MAX


def require_uint256(*xs: Any) -> None:
    """Revert unless every argument is an int in [0, U256_MAX]."""
    for x in xs:
        if not is_uint256(x):
            raise Revert(
                f"value out of uint256 range: {x!r}",
                kind="Error",
                reason="uint256 out of range",
            )


# ---------------------------------------------------------------------------
# Checked (fail-fast on errors)
# ---------------------------------------------------------------------------

def u256_add(x: int, y: int) -> int:
    """Checked add: revert on overflow."""
    require_uint256(x, y)
    s = x + y
    if s > U256_MAX:
        raise Revert.panic(PANIC_ARITHMETIC)
    return s


def u256_sub(x: int, y: int) -> int:
    """Checked sub: revert on underflow (y > x)."""
    require_uint256(x, y)
    if y > x:
        raise Revert.panic(PANIC_ARITHMETIC)
    return x - y


def u256_mul(x: int, y: int) -> int:
    """Checked multiply: revert on overflow."""
    require_uint256(x, y)
    p = x * y
    if p > U256_MAX:
        raise Revert.panic(PANIC_ARITHMETIC)
    return p


def u256_div(x: int, y: int) -> int:
    """Checked divide (floor): revert on div-by-zero."""
    require_uint256(x, y)
    if y == 0:
        raise Revert.panic(PANIC_DIV_ZERO)
    return x // y


def u256_mul_div_down(x: int, y: int, d: int) -> int:
    """
    floor(x*y / d) with Solidity's evaluation order: the product itself must
    fit in uint256, so ``(x * y) / d`` overflows where a wide mul-div would not.
    """
    return u256_div(u256_mul(x, y), d)


def type_limits() -> Tuple[int, int, int, int]:
    """Maximum values of uint8, uint16, uint32 and uint256."""
    return (U8_MAX, U16_MAX, U32_MAX, U256_MAX)


__all__ = [
    "U8_MAX",
    "U16_MAX",
    "U32_MAX",
    "U256_MAX",
    "is_uint256",
    "require_uint256",
    "u256_add",
    "u256_sub",
    "u256_mul",
    "u256_div",
    "u256_mul_div_down",
    "type_limits",
]
