# -*- coding: utf-8 -*-
"""
FundMe

Crowdfunding with a minimum contribution expressed in USD. The ETH/USD
price is fixed (no oracle): 2000 USD per ETH with 18 decimals.

Public ABI:
- fund()                                  payable, at least MINIMUM_USD worth
- withdraw()                              owner only (NotOwner); pays out everything
- receive()                               plain transfers count as fund()
- get_price(), get_conversion_rate(wei)
- get_funder(i), get_address_to_amount_funded(addr), get_owner()
"""
from __future__ import annotations

from typing import Any, Optional

from devchain.contract import Contract, external, payable, pure, view
from devchain.errors import Revert

from contracts.stdlib.access import ownable
from contracts.stdlib.math.safe_uint import require_uint256, u256_add, u256_mul_div_down
from contracts.stdlib.utils.codec import (
    as_address,
    decode_address,
    decode_uint,
    encode_address,
    encode_uint,
)
from contracts.stdlib.utils.collections import StorageArray, StorageMap

PRICE_DECIMALS = 10**18
ETH_USD_PRICE = 2_000 * PRICE_DECIMALS
MINIMUM_USD = 5 * PRICE_DECIMALS

KEY_FUNDERS = b"fm:funders"
KEY_AMOUNTS = b"fm:address_to_amount_funded"


def _funders(ctx: Any) -> StorageArray[bytes]:
    return StorageArray(ctx, KEY_FUNDERS, encode_address, decode_address)


def _amounts(ctx: Any) -> StorageMap[int]:
    return StorageMap(ctx, KEY_AMOUNTS, encode_uint, decode_uint)


def conversion_rate(wei: int) -> int:
    """USD value (18 decimals) of `wei` at the fixed price."""
    return u256_mul_div_down(ETH_USD_PRICE, wei, PRICE_DECIMALS)


class FundMe(Contract):
    def constructor(self, ctx: Any) -> None:
        ownable.init_owner(ctx, ctx.sender)

    @payable
    def fund(self, ctx: Any) -> None:
        if conversion_rate(ctx.value) < MINIMUM_USD:
            raise Revert.error("You need to send at least 5 USD")
        _funders(ctx).append(ctx.sender)
        amounts = _amounts(ctx)
        amounts.set(ctx.sender, u256_add(amounts.get(ctx.sender), ctx.value))

    @payable
    def receive(self, ctx: Any) -> None:
        self.fund(ctx)

    @external
    def withdraw(self, ctx: Any) -> None:
        ownable.require_owner(ctx, error="NotOwner")
        funders = _funders(ctx)
        amounts = _amounts(ctx)
        for funder in funders:
            amounts.delete(funder)
        funders.clear()
        ctx.transfer(ctx.sender, ctx.balance())

    @pure
    def get_price(self, ctx: Any) -> int:
        return ETH_USD_PRICE

    @pure
    def get_conversion_rate(self, ctx: Any, wei: int) -> int:
        require_uint256(wei)
        return conversion_rate(wei)

    @view
    def get_funder(self, ctx: Any, index: int) -> bytes:
        return _funders(ctx).get(index)

    @view
    def get_address_to_amount_funded(self, ctx: Any, funder: Any) -> int:
        return _amounts(ctx).get(as_address(funder))

    @view
    def get_owner(self, ctx: Any) -> Optional[bytes]:
        return ownable.get_owner(ctx)
