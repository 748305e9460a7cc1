# -*- coding: utf-8 -*-
"""StructsAndMappingsDemo: Person records kept consistent across mappings."""
from __future__ import annotations

import pytest

from devchain.context import ZERO_ADDRESS

from contracts.examples import StructsAndMappingsDemo
from contracts.examples.structs_mappings import EMPTY_PERSON, INVALID_PERSON_ERROR, Person
from contracts.stdlib.math.safe_uint import U256_MAX


@pytest.fixture()
def people(chain):
    return chain.deploy(StructsAndMappingsDemo)


def test_add_person(people, alice):
    r = people.connect(alice).add_person("Alice", 25)
    assert [(e.name, e.args) for e in r.events] == [
        ("PersonAdded", {"name": "Alice", "favoriteNumber": 25, "wallet": alice})
    ]
    assert people.get_people_count() == 1
    assert people.name_to_favorite_number("Alice") == 25
    assert people.number_exists(25) is True
    assert people.get_person(0) == Person("Alice", 0, True, alice)


def test_empty_name_rejected(people, alice, expect_revert):
    expect_revert(people.connect(alice).add_person, "", 25, kind=INVALID_PERSON_ERROR)
    assert people.get_people_count() == 0
    assert people.number_exists(25) is False


def test_add_multiple_people(people, alice, bob):
    people.connect(alice).add_person("Alice", 25)
    people.connect(bob).add_person("Bob", 30)
    assert people.get_people_count() == 2
    assert people.name_to_favorite_number("Alice") == 25
    assert people.name_to_favorite_number("Bob") == 30


def test_update_age(people, alice):
    people.connect(alice).add_person("Alice", 25)
    people.connect(alice).update_age(26)
    person = people.address_to_person(alice)
    assert person.age == 26
    assert (person.name, person.is_active, person.wallet) == ("Alice", True, alice)


def test_mapping_lookups(people, alice, bob):
    people.connect(alice).add_person("Alice", 25)
    assert people.name_to_favorite_number("NonExistent") == 0
    person = people.address_to_person(alice)
    assert person == Person(name="Alice", age=0, is_active=True, wallet=alice)
    assert people.address_to_person(bob) == EMPTY_PERSON
    assert people.number_exists(999) is False


def test_update_age_without_record(people, bob):
    people.connect(bob).update_age(40)
    assert people.address_to_person(bob) == Person("", 40, False, ZERO_ADDRESS)
    assert people.get_people_count() == 0


def test_shared_favorite_number(people, alice, bob):
    people.connect(alice).add_person("Alice", 25)
    people.connect(bob).add_person("Bob", 25)
    assert people.number_exists(25) is True
    assert people.name_to_favorite_number("Alice") == 25
    assert people.name_to_favorite_number("Bob") == 25


@pytest.mark.parametrize("name,number", [("A" * 100, 999), ("LargeNumber", U256_MAX)])
def test_edge_values(people, alice, name, number):
    r = people.connect(alice).add_person(name, number)
    assert r.events[0].args["name"] == name
    assert r.events[0].args["favoriteNumber"] == number
    assert people.name_to_favorite_number(name) == number
