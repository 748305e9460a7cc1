# -*- coding: utf-8 -*-
"""
contracts.stdlib
================

Building blocks imported by devchain contracts.

Every helper takes the ``CallContext`` of the running call as its first
argument and reaches state only through ``ctx.storage``; nothing here keeps
module-level state, reads the wall clock or draws randomness.

Layout
------
- ``math.safe_uint``     checked uint256 arithmetic and type limits
- ``access.ownable``     owner slot and owner-only checks
- ``access.authorized``  authorized-identity set
- ``control.gates``      ordered predicate chains with first-failure semantics
- ``control.guard``      single-call reentrancy guard
- ``utils.codec``        fixed storage encodings (uint256, bool, address, str)
- ``utils.collections``  storage-backed dynamic array and mapping
"""
