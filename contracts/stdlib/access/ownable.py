# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.ownable
================================

Minimal, deterministic **Ownable** helper for devchain contracts.

- read the current owner (`get_owner`, `is_owner`)
- initialize the owner once (`init_owner`)
- check that the caller is the owner (`require_owner`, `owner_gate`)

The owner is written once during construction and never changes; there is
deliberately no transfer or renounce path.

The revert kind is chosen by the contract: ``ModifiersAndAccessDemo`` uses
``UnauthorizedAccess`` and ``FundMe`` uses ``NotOwner``.
"""
from __future__ import annotations

from typing import Any, Optional

from devchain.errors import Revert

from ..control.gates import Gate
from ..utils.codec import decode_address, encode_address

OWNER_KEY: bytes = b"access:owner"

__all__ = [
    "OWNER_KEY",
    "get_owner",
    "init_owner",
    "is_owner",
    "require_owner",
    "owner_gate",
]


def get_owner(ctx: Any) -> Optional[bytes]:
    """
    Return the current owner address, or None if not set.
    """
    return decode_address(ctx.storage.get(OWNER_KEY))


def init_owner(ctx: Any, owner: bytes) -> None:
    """
    Initialize the contract owner. Idempotent: does not overwrite if already set.
    """
    if get_owner(ctx) is None:
        ctx.storage.set(OWNER_KEY, encode_address(owner))


def is_owner(ctx: Any, who: bytes) -> bool:
    owner = get_owner(ctx)
    return owner is not None and owner == bytes(who)


def owner_gate(*, error: str = "NotOwner") -> Gate:
    """Gate that fails with custom error `error` unless the caller is the owner."""

    def check(ctx: Any) -> Optional[Revert]:
        if is_owner(ctx, ctx.sender):
            return None
        return Revert.custom(error)

    check.__name__ = f"owner_only[{error}]"
    return check


def require_owner(ctx: Any, *, error: str = "NotOwner") -> None:
    """
    Revert with custom error `error` unless ``ctx.sender`` is the owner.
    """
    failure = owner_gate(error=error)(ctx)
    if failure is not None:
        raise failure
