# -*- coding: utf-8 -*-
"""
SimpleStorage

One favorite number plus a registry of people.

Public ABI:
- store(n)                        set the favorite number (subclasses may override)
- retrieve() -> int               favorite number (0 initially)
- add_person(name, n)             append Person(n, name) and map name -> n
- name_to_favorite_number(name)   0 for unknown names
- get_person(i) -> (n, name)      reverts "Index out of bounds" past the end
- get_people_count() -> int
"""
from __future__ import annotations

from typing import Any, Tuple

from devchain.contract import Contract, external, view
from devchain.errors import Revert

from contracts.stdlib.math.safe_uint import require_uint256
from contracts.stdlib.utils.codec import decode_str, decode_uint, encode_str, encode_uint
from contracts.stdlib.utils.collections import StorageArray, StorageMap

KEY_FAVORITE = b"ss:favorite_number"
KEY_PEOPLE = b"ss:people"
KEY_NAME_TO_NUMBER = b"ss:name_to_favorite_number"

Person = Tuple[int, str]


def _encode_person(person: Person) -> bytes:
    number, name = person
    return number.to_bytes(32, "big") + encode_str(name)


def _decode_person(raw: bytes) -> Person:
    return int.from_bytes(raw[:32], "big"), decode_str(raw[32:])


def _people(ctx: Any) -> StorageArray[Person]:
    return StorageArray(ctx, KEY_PEOPLE, _encode_person, _decode_person)


def _name_to_number(ctx: Any) -> StorageMap[int]:
    return StorageMap(ctx, KEY_NAME_TO_NUMBER, encode_uint, decode_uint)


def _require_name(name: Any) -> str:
    if not isinstance(name, str):
        raise Revert.error("name must be a string")
    return name


class SimpleStorage(Contract):
    @external
    def store(self, ctx: Any, n: int) -> None:
        require_uint256(n)
        ctx.storage.set(KEY_FAVORITE, encode_uint(n))

    @view
    def retrieve(self, ctx: Any) -> int:
        return decode_uint(ctx.storage.get(KEY_FAVORITE))

    @external
    def add_person(self, ctx: Any, name: str, n: int) -> None:
        name = _require_name(name)
        require_uint256(n)
        _people(ctx).append((n, name))
        _name_to_number(ctx).set(name, n)

    @view
    def name_to_favorite_number(self, ctx: Any, name: str) -> int:
        return _name_to_number(ctx).get(_require_name(name))

    @view
    def get_person(self, ctx: Any, index: int) -> Person:
        people = _people(ctx)
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(people):
            raise Revert.error("Index out of bounds")
        return people.get(index)

    @view
    def get_people_count(self, ctx: Any) -> int:
        return len(_people(ctx))
