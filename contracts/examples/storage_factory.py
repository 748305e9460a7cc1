# -*- coding: utf-8 -*-
"""
StorageFactory

Deploys SimpleStorage children and forwards store/retrieve to them by index.
An index past the end reverts with Panic(0x32), like a Solidity array read.
"""
from __future__ import annotations

from typing import Any

from devchain.contract import Contract, external, view

from contracts.stdlib.utils.codec import decode_address, encode_address
from contracts.stdlib.utils.collections import StorageArray

from .simple_storage import SimpleStorage

KEY_CHILDREN = b"sf:children"


def _children(ctx: Any) -> StorageArray[bytes]:
    return StorageArray(ctx, KEY_CHILDREN, encode_address, decode_address)


class StorageFactory(Contract):
    @external
    def create_simple_storage_contract(self, ctx: Any) -> bytes:
        child = ctx.create(SimpleStorage)
        _children(ctx).append(child)
        return child

    @external
    def sf_store(self, ctx: Any, index: int, n: int) -> None:
        ctx.call(_children(ctx).get(index), "store", n)

    @view
    def sf_get(self, ctx: Any, index: int) -> int:
        return ctx.call(_children(ctx).get(index), "retrieve")

    @view
    def list_of_simple_storage_contracts(self, ctx: Any, index: int) -> bytes:
        return _children(ctx).get(index)

    @view
    def get_contract_count(self, ctx: Any) -> int:
        return len(_children(ctx))
