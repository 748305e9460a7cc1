# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from devchain.errors import PANIC_ARITHMETIC

from contracts.examples import MathUtilsDemo
from contracts.stdlib.math.safe_uint import U256_MAX


@pytest.fixture()
def math_demo(chain):
    return chain.deploy(MathUtilsDemo)


@pytest.mark.parametrize("a,b,out", [(5, 3, 8), (0, 0, 0), (100, 0, 100), (0, 100, 100), (U256_MAX - 1, 1, U256_MAX)])
def test_add(math_demo, a, b, out):
    assert math_demo.add(a, b) == out


def test_add_overflow_panics(math_demo, expect_revert):
    err = expect_revert(math_demo.add, U256_MAX, 1, kind="Panic")
    assert err.panic_code == PANIC_ARITHMETIC


def test_consecutive_additions(math_demo):
    result = math_demo.add(1, 2)
    result = math_demo.add(result, 3)
    assert math_demo.add(result, 4) == 10


def test_type_limits(math_demo):
    assert math_demo.get_type_limits() == (255, 65_535, 4_294_967_295, 2**256 - 1)


def test_block_info_tracks_chain(chain, math_demo):
    timestamp, number, coinbase = math_demo.get_block_info()
    assert (timestamp, number, coinbase) == (chain.timestamp, chain.block_number, chain.coinbase)
    chain.increase_time(60)
    chain.mine()
    timestamp2, number2, _ = math_demo.get_block_info()
    assert number2 == number + 1
    assert timestamp2 == timestamp + 61
