# -*- coding: utf-8 -*-
"""
contracts.tests.conftest
========================

Pytest fixtures for the demo contracts.

- ``chain``: a fresh :class:`devchain.DevChain` per test.
- ``owner``, ``alice``, ``bob``: the first three deterministic signers.
- ``demo``: a ``ModifiersAndAccessDemo`` deployed by ``owner``.
- ``expect_revert``: assert helper for the *first* failing check's error.

Usage (inside a test file):
    def test_owner_only(demo, alice, expect_revert):
        expect_revert(demo.connect(alice).set_max_gas_price, 1, kind="UnauthorizedAccess")
"""
from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

from devchain.chain import DevChain
from devchain.errors import Revert

from contracts.examples import ModifiersAndAccessDemo


@pytest.fixture()
def chain() -> DevChain:
    return DevChain()


@pytest.fixture()
def owner(chain: DevChain) -> bytes:
    return chain.accounts[0]


@pytest.fixture()
def alice(chain: DevChain) -> bytes:
    return chain.accounts[1]


@pytest.fixture()
def bob(chain: DevChain) -> bytes:
    return chain.accounts[2]


@pytest.fixture()
def demo(chain: DevChain, owner: bytes):
    return chain.deploy(ModifiersAndAccessDemo, sender=owner)


def _expect_revert(
    fn: Callable[..., Any],
    *args: Any,
    kind: str = "Error",
    reason: Optional[str] = None,
    **kwargs: Any,
) -> Revert:
    with pytest.raises(Revert) as ei:
        fn(*args, **kwargs)
    err = ei.value
    assert err.kind == kind, f"expected {kind}, got {err.kind} ({err})"
    if reason is not None:
        assert err.reason == reason
    return err


@pytest.fixture()
def expect_revert() -> Callable[..., Revert]:
    return _expect_revert
