# -*- coding: utf-8 -*-
"""contracts.stdlib.math — integer-only arithmetic helpers."""

from .safe_uint import (
    U8_MAX,
    U16_MAX,
    U32_MAX,
    U256_MAX,
    require_uint256,
    type_limits,
    u256_add,
    u256_div,
    u256_mul,
    u256_mul_div_down,
    u256_sub,
)

__all__ = [
    "U8_MAX",
    "U16_MAX",
    "U32_MAX",
    "U256_MAX",
    "require_uint256",
    "type_limits",
    "u256_add",
    "u256_sub",
    "u256_mul",
    "u256_div",
    "u256_mul_div_down",
]
