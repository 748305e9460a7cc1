# -*- coding: utf-8 -*-
"""
ModifiersAndAccessDemo (policy-gated store)

A value store whose single mutating operation, ``restricted_update``, sits
behind an ordered chain of independent checks:

    1. status == ACTIVE                 else InvalidStatus
    2. number <= MAX_NUMBER             else NumberTooLarge(number)
    3. caller is owner or authorized    else "not authorized"
    4. not already inside the call      else ReentrancyGuardReentrantCall

Callers only ever see the first failing check.

Public ABI:
- add_authorized_user(who) / remove_authorized_user(who)   owner only;
  adding the owner is a no-op
- set_max_gas_price(value)                                  owner only
- restricted_update(number)
- time_restricted_function()            only from deploy time + 1 hour
- gas_price_restricted_function(number) tx gas price <= max gas price
- owner(), current_status(), get_authorized(who), get_max_gas_price(),
  stored_value()

Events:
- ValueUpdated {"number": int, "by": bytes}
"""
from __future__ import annotations

from typing import Any, Optional

from devchain.config import GWEI
from devchain.contract import Contract, external, view

from contracts.stdlib.access import authorized, ownable
from contracts.stdlib.control import gates, guard
from contracts.stdlib.math.safe_uint import require_uint256
from contracts.stdlib.utils.codec import as_address, decode_uint, encode_uint

# --- Status values ---
INACTIVE = 0
ACTIVE = 1
PAUSED = 2

# --- Bounds ---
MAX_NUMBER = 1_000_000
TIME_LOCK_SECONDS = 3_600
DEFAULT_MAX_GAS_PRICE = 50 * GWEI

# --- Storage keys ---
KEY_STATUS = b"demo:status"
KEY_MAX_GAS_PRICE = b"demo:max_gas_price"
KEY_DEPLOY_TIME = b"demo:deploy_time"
KEY_STORED_VALUE = b"demo:stored_value"

UPDATE_SCOPE = b"restricted_update"
OWNER_ONLY_ERROR = "UnauthorizedAccess"


def _read_uint(ctx: Any, key: bytes) -> int:
    return decode_uint(ctx.storage.get(key))


def _owner_or_authorized(ctx: Any, who: bytes) -> bool:
    return ownable.is_owner(ctx, who) or authorized.is_member(ctx, who)


class ModifiersAndAccessDemo(Contract):
    def constructor(self, ctx: Any) -> None:
        ownable.init_owner(ctx, ctx.sender)
        ctx.storage.set(KEY_STATUS, encode_uint(ACTIVE))
        ctx.storage.set(KEY_MAX_GAS_PRICE, encode_uint(DEFAULT_MAX_GAS_PRICE))
        ctx.storage.set(KEY_DEPLOY_TIME, encode_uint(ctx.block.timestamp))

    # ------------------------------------------------------------------ #
    # Owner-only administration
    # ------------------------------------------------------------------ #

    @external
    def add_authorized_user(self, ctx: Any, who: Any) -> None:
        who = as_address(who)
        ownable.require_owner(ctx, error=OWNER_ONLY_ERROR)
        # owner access never depends on membership
        if ownable.is_owner(ctx, who):
            return
        authorized.add(ctx, who)

    @external
    def remove_authorized_user(self, ctx: Any, who: Any) -> None:
        who = as_address(who)
        ownable.require_owner(ctx, error=OWNER_ONLY_ERROR)
        authorized.remove(ctx, who)

    @external
    def set_max_gas_price(self, ctx: Any, value: int) -> None:
        require_uint256(value)
        ownable.require_owner(ctx, error=OWNER_ONLY_ERROR)
        ctx.storage.set(KEY_MAX_GAS_PRICE, encode_uint(value))

    # ------------------------------------------------------------------ #
    # Gated operations
    # ------------------------------------------------------------------ #

    @external
    def restricted_update(self, ctx: Any, number: int) -> None:
        require_uint256(number)
        gates.enforce(
            ctx,
            gates.status_is(lambda c: _read_uint(c, KEY_STATUS), ACTIVE),
            gates.at_most(number, MAX_NUMBER),
            gates.caller_allowed(_owner_or_authorized),
        )
        with guard.non_reentrant(ctx, UPDATE_SCOPE):
            self._write(ctx, number)

    def _write(self, ctx: Any, number: int) -> None:
        ctx.storage.set(KEY_STORED_VALUE, encode_uint(number))
        ctx.emit("ValueUpdated", {"number": number, "by": ctx.sender})

    @external
    def time_restricted_function(self, ctx: Any) -> None:
        gates.enforce(
            ctx,
            gates.not_before(lambda c: _read_uint(c, KEY_DEPLOY_TIME) + TIME_LOCK_SECONDS),
        )

    @external
    def gas_price_restricted_function(self, ctx: Any, number: int) -> None:
        require_uint256(number)
        gates.enforce(
            ctx,
            gates.at_most(number, MAX_NUMBER),
            gates.gas_price_at_most(lambda c: _read_uint(c, KEY_MAX_GAS_PRICE)),
        )

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #

    @view
    def owner(self, ctx: Any) -> Optional[bytes]:
        return ownable.get_owner(ctx)

    @view
    def current_status(self, ctx: Any) -> int:
        return _read_uint(ctx, KEY_STATUS)

    @view
    def get_authorized(self, ctx: Any, who: Any) -> bool:
        return authorized.is_member(ctx, as_address(who))

    @view
    def get_max_gas_price(self, ctx: Any) -> int:
        return _read_uint(ctx, KEY_MAX_GAS_PRICE)

    @view
    def stored_value(self, ctx: Any) -> int:
        return _read_uint(ctx, KEY_STORED_VALUE)
