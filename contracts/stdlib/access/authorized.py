# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.authorized
==================================

Unbounded set of authorized identities, one storage slot per member.

Insert and remove are idempotent; both return whether the set changed so a
caller can decide to emit an event only on real changes.
"""
from __future__ import annotations

from typing import Any

from ..utils.codec import decode_bool, encode_bool

AUTHORIZED_PREFIX: bytes = b"access:authorized:"


def _key(who: bytes) -> bytes:
    return AUTHORIZED_PREFIX + bytes(who)


def is_member(ctx: Any, who: bytes) -> bool:
    return decode_bool(ctx.storage.get(_key(who)))


def add(ctx: Any, who: bytes) -> bool:
    if is_member(ctx, who):
        return False
    ctx.storage.set(_key(who), encode_bool(True))
    return True


def remove(ctx: Any, who: bytes) -> bool:
    if not is_member(ctx, who):
        return False
    ctx.storage.delete(_key(who))
    return True


__all__ = ["AUTHORIZED_PREFIX", "is_member", "add", "remove"]
