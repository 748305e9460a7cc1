# -*- coding: utf-8 -*-
"""FundMe with a fixed 2000 USD/ETH price."""
from __future__ import annotations

import pytest

from devchain.config import ETHER
from devchain.errors import PANIC_INDEX_OOB

from contracts.examples import FundMe
from contracts.examples.fund_me import ETH_USD_PRICE, MINIMUM_USD


def milli(n: int) -> int:
    return n * ETHER // 1000


@pytest.fixture()
def fund_me(chain, owner):
    return chain.deploy(FundMe, sender=owner)


def test_price_and_conversion(fund_me):
    assert fund_me.get_price() == ETH_USD_PRICE == 2_000 * ETHER
    assert fund_me.get_conversion_rate(ETHER) == 2_000 * ETHER
    assert fund_me.get_conversion_rate(milli(3)) == 6 * ETHER


def test_minimum_contribution(fund_me, expect_revert):
    expect_revert(fund_me.fund, value=milli(2), reason="You need to send at least 5 USD")
    # exactly 5 USD is enough
    exact = MINIMUM_USD * ETHER // ETH_USD_PRICE
    assert fund_me.fund(value=exact).ok


def test_rejected_fund_refunds_value(chain, fund_me, alice):
    before = chain.get_balance(alice)
    r = fund_me.connect(alice).fund(value=milli(1), check=False)
    assert not r.ok
    assert chain.get_balance(alice) == before - r.fee
    assert fund_me.balance == 0


def test_tracks_funders(fund_me, owner):
    fund_me.fund(value=milli(3))
    assert fund_me.get_funder(0) == owner
    assert fund_me.get_address_to_amount_funded(owner) == milli(3)
    assert fund_me.get_owner() == owner


def test_multiple_funders(fund_me, alice, bob):
    fund_me.connect(alice).fund(value=milli(3))
    fund_me.connect(bob).fund(value=milli(4))
    fund_me.connect(alice).fund(value=milli(3))
    assert fund_me.get_funder(0) == alice
    assert fund_me.get_funder(1) == bob
    assert fund_me.get_funder(2) == alice
    assert fund_me.get_address_to_amount_funded(alice) == milli(6)
    assert fund_me.get_address_to_amount_funded(bob) == milli(4)
    assert fund_me.balance == milli(10)


def test_plain_transfer_funds(fund_me, alice, expect_revert):
    assert fund_me.connect(alice).send_value(milli(5)).ok
    assert fund_me.get_address_to_amount_funded(alice) == milli(5)
    r = fund_me.connect(alice).send_value(1)
    assert r.error is not None and r.error.reason == "You need to send at least 5 USD"


def test_funder_index_out_of_range(fund_me, expect_revert):
    err = expect_revert(fund_me.get_funder, 0, kind="Panic")
    assert err.panic_code == PANIC_INDEX_OOB


def test_withdraw_is_owner_only(fund_me, alice, expect_revert):
    fund_me.connect(alice).fund(value=milli(3))
    expect_revert(fund_me.connect(alice).withdraw, kind="NotOwner")
    assert fund_me.balance == milli(3)


def test_withdraw_pays_owner_and_resets(chain, fund_me, owner, alice, bob, expect_revert):
    fund_me.connect(alice).fund(value=milli(3))
    fund_me.connect(bob).fund(value=milli(4))
    before = chain.get_balance(owner)
    r = fund_me.withdraw()
    assert chain.get_balance(owner) == before + milli(7) - r.fee
    assert fund_me.balance == 0
    assert fund_me.get_address_to_amount_funded(alice) == 0
    assert fund_me.get_address_to_amount_funded(bob) == 0
    expect_revert(fund_me.get_funder, 0, kind="Panic")
    # funding starts over cleanly
    fund_me.connect(bob).fund(value=milli(3))
    assert fund_me.get_funder(0) == bob


def test_fund_is_payable_only_where_declared(fund_me):
    r = fund_me.withdraw(value=1, check=False)
    assert r.error is not None and r.error.code == "INVALID_ACCESS"
