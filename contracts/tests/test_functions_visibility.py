# -*- coding: utf-8 -*-
"""FunctionsVisibilityDemo: which methods are reachable from outside."""
from __future__ import annotations

import pytest

from devchain.errors import InvalidAccess

from contracts.examples import FunctionsVisibilityDemo


@pytest.fixture()
def vis(chain):
    return chain.deploy(FunctionsVisibilityDemo)


def test_public_and_external_from_any_account(vis, owner, alice):
    for who in (owner, alice):
        assert vis.connect(who).public_function() == "public"
        assert vis.connect(who).external_function() == "external"


def test_external_through_own_address(chain, vis):
    height = chain.block_number
    assert vis.call_external_function() == "external"
    # read-only: nothing mined
    assert chain.block_number == height


def test_demonstrate_visibility(vis):
    assert vis.demonstrate_visibility() == ("public", "internal", "private")


def test_only_decorated_methods_are_exported():
    assert sorted(FunctionsVisibilityDemo.abi()) == [
        "call_external_function",
        "demonstrate_visibility",
        "external_function",
        "public_function",
    ]


@pytest.mark.parametrize("name", ["internal_function", "private_function", "_internal_function"])
def test_helpers_not_on_handle(vis, name):
    with pytest.raises(AttributeError):
        getattr(vis, name)


@pytest.mark.parametrize(
    "method",
    ["_internal_function", "_FunctionsVisibilityDemo__private_function", "internal_function"],
)
def test_helpers_not_callable_by_name(chain, vis, alice, method):
    r = chain.transact(vis.address, method, sender=alice)
    assert r.status == 0
    assert isinstance(r.error, InvalidAccess)
    with pytest.raises(InvalidAccess):
        chain.call(vis.address, method)


def test_repeated_calls_are_stable(vis):
    assert [vis.public_function() for _ in range(3)] == ["public"] * 3
    assert [vis.external_function() for _ in range(3)] == ["external"] * 3
