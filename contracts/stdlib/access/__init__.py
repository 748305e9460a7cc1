# -*- coding: utf-8 -*-
"""
contracts.stdlib.access
=======================

Owner and authorized-set helpers for devchain contracts.

Storage layout (by convention)
------------------------------
- Owner:
    key ``b"access:owner"`` → 20-byte address, written once at deploy.
- Authorized set membership:
    key ``b"access:authorized:" + addr`` → ``b"\\x01"`` if member, absent otherwise.

These keys are deterministic byte strings; *do not* change them after deploy.

Quick usage (inside a contract method)
--------------------------------------
    from contracts.stdlib.access import ownable, authorized

    def constructor(self, ctx):
        ownable.init_owner(ctx, ctx.sender)

    @external
    def add_member(self, ctx, who):
        ownable.require_owner(ctx, error="UnauthorizedAccess")
        authorized.add(ctx, who)
"""
from __future__ import annotations

from .authorized import AUTHORIZED_PREFIX
from .ownable import OWNER_KEY

__all__ = ["OWNER_KEY", "AUTHORIZED_PREFIX"]
