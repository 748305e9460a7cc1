# -*- coding: utf-8 -*-
"""
StructsAndMappingsDemo

A people registry built from one struct and three mappings:

- people                 array of Person
- address_to_person      wallet -> Person (the caller's own record)
- name_to_favorite_number
- number_exists          favorite number -> bool

Person is (name, age, is_active, wallet). The favorite number is kept only
in the mappings, not in the struct.

Public ABI:
- add_person(name, favorite_number)   reverts InvalidPersonData on an empty name
- update_age(age)                     sets the caller's age in address_to_person
- address_to_person(wallet) -> Person ("", 0, False, zero address) if unset
- name_to_favorite_number(name) -> int
- number_exists(n) -> bool
- get_person(i) -> Person, get_people_count() -> int

Events:
- PersonAdded {"name": str, "favoriteNumber": int, "wallet": bytes}
"""
from __future__ import annotations

from typing import Any, NamedTuple

from devchain.context import ZERO_ADDRESS
from devchain.contract import Contract, external, view
from devchain.errors import Revert

from contracts.stdlib.math.safe_uint import require_uint256
from contracts.stdlib.utils.codec import (
    as_address,
    decode_bool,
    decode_str,
    decode_uint,
    encode_bool,
    encode_str,
    encode_uint,
)
from contracts.stdlib.utils.collections import StorageArray, StorageMap

KEY_PEOPLE = b"sm:people"
KEY_ADDRESS_TO_PERSON = b"sm:address_to_person"
KEY_NAME_TO_NUMBER = b"sm:name_to_favorite_number"
KEY_NUMBER_EXISTS = b"sm:number_exists"

INVALID_PERSON_ERROR = "InvalidPersonData"


class Person(NamedTuple):
    name: str
    age: int
    is_active: bool
    wallet: bytes


EMPTY_PERSON = Person("", 0, False, ZERO_ADDRESS)


# Layout: age (32) | is_active (1) | wallet (20) | utf-8 name
def _encode_person(p: Person) -> bytes:
    if p == EMPTY_PERSON:
        return b""
    return p.age.to_bytes(32, "big") + (b"\x01" if p.is_active else b"\x00") + p.wallet + encode_str(p.name)


def _decode_person(raw: bytes) -> Person:
    if not raw:
        return EMPTY_PERSON
    return Person(
        name=decode_str(raw[53:]),
        age=int.from_bytes(raw[:32], "big"),
        is_active=raw[32:33] == b"\x01",
        wallet=raw[33:53],
    )


def _people(ctx: Any) -> StorageArray[Person]:
    return StorageArray(ctx, KEY_PEOPLE, _encode_person, _decode_person)


def _by_address(ctx: Any) -> StorageMap[Person]:
    return StorageMap(ctx, KEY_ADDRESS_TO_PERSON, _encode_person, _decode_person)


def _name_to_number(ctx: Any) -> StorageMap[int]:
    return StorageMap(ctx, KEY_NAME_TO_NUMBER, encode_uint, decode_uint)


def _number_exists(ctx: Any) -> StorageMap[bool]:
    return StorageMap(ctx, KEY_NUMBER_EXISTS, encode_bool, decode_bool)


def _require_str(name: Any) -> str:
    if not isinstance(name, str):
        raise Revert.error("name must be a string")
    return name


class StructsAndMappingsDemo(Contract):
    @external
    def add_person(self, ctx: Any, name: str, favorite_number: int) -> None:
        name = _require_str(name)
        require_uint256(favorite_number)
        if not name:
            raise Revert.custom(INVALID_PERSON_ERROR)
        person = Person(name=name, age=0, is_active=True, wallet=ctx.sender)
        _people(ctx).append(person)
        _by_address(ctx).set(ctx.sender, person)
        _name_to_number(ctx).set(name, favorite_number)
        _number_exists(ctx).set(favorite_number, True)
        ctx.emit("PersonAdded", {"name": name, "favoriteNumber": favorite_number, "wallet": ctx.sender})

    @external
    def update_age(self, ctx: Any, age: int) -> None:
        require_uint256(age)
        records = _by_address(ctx)
        records.set(ctx.sender, records.get(ctx.sender)._replace(age=age))

    @view
    def address_to_person(self, ctx: Any, wallet: Any) -> Person:
        return _by_address(ctx).get(as_address(wallet))

    @view
    def name_to_favorite_number(self, ctx: Any, name: str) -> int:
        return _name_to_number(ctx).get(_require_str(name))

    @view
    def number_exists(self, ctx: Any, n: int) -> bool:
        require_uint256(n)
        return _number_exists(ctx).get(n)

    @view
    def get_person(self, ctx: Any, index: int) -> Person:
        return _people(ctx).get(index)

    @view
    def get_people_count(self, ctx: Any) -> int:
        return len(_people(ctx))
