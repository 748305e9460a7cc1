# -*- coding: utf-8 -*-
"""
contracts.stdlib.control
========================

Deterministic control primitives for devchain contracts.

1) **Gates** (``control.gates``)
   A gate is a callable ``gate(ctx) -> Optional[Revert]``: it returns None to
   let the call through, or the error the call must fail with. A contract
   lists its gates in order and ``enforce`` raises the first failure, so the
   caller always sees the *first* failing check.

2) **Reentrancy Guard** (``control.guard``)
   A storage latch keyed by a scope tag. Typical pattern:

       with guard.non_reentrant(ctx, b"update"):
           # critical section
           ...

   Re-entering a scope while its latch is set reverts with
   ``ReentrancyGuardReentrantCall``. The latch is cleared on every exit path.

Storage Layout
--------------
- Reentrancy latch:
    key = b"control:reentrancy:" + scope                   → b"\\x01" or empty
"""
from __future__ import annotations

from .gates import Gate, enforce, first_failure
from .guard import REENTRANCY_ERROR, non_reentrant

__all__ = ["Gate", "enforce", "first_failure", "REENTRANCY_ERROR", "non_reentrant"]
