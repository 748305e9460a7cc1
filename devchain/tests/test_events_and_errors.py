from __future__ import annotations

import pytest

from devchain.errors import (
    OOG,
    PANIC_ARITHMETIC,
    PANIC_INDEX_OOB,
    InvalidAccess,
    Revert,
    failure_fields,
)
from devchain.events import make_event

ADDR = b"\x11" * 20


def test_make_event_normalizes_keys_and_values():
    ev = make_event(ADDR, b"ValueUpdated", {b"number": 5, "by": bytearray(ADDR), "ok": True})
    assert ev.name == "ValueUpdated"
    assert ev.args == {"number": 5, "by": ADDR, "ok": True}
    assert ev.to_dict()["args"]["by"] == "0x" + ADDR.hex()


@pytest.mark.parametrize(
    "name,args",
    [
        ("", {}),
        ("1Bad", {}),
        ("Ok", {"bad-key": 1}),
        ("Ok", {"n": -1}),
        ("Ok", {"n": 1 << 256}),
        ("Ok", {"blob": b"x" * 4097}),
        ("Ok", {"f": 1.5}),
    ],
)
def test_make_event_rejects(name, args):
    with pytest.raises(InvalidAccess):
        make_event(ADDR, name, args)


def test_revert_shapes():
    r = Revert.error("too early")
    assert (r.kind, r.reason, r.params) == ("Error", "too early", ())
    assert r.to_dict() == {"code": "REVERT", "message": "too early", "data": {"kind": "Error", "reason": "too early"}}

    c = Revert.custom("NumberTooLarge", 2_000_000)
    assert c.kind == "NumberTooLarge"
    assert c.params == (2_000_000,)
    assert c.message == "NumberTooLarge(2000000)"
    assert c.panic_code is None

    p = Revert.panic(PANIC_INDEX_OOB)
    assert p.kind == "Panic"
    assert p.panic_code == 0x32


def test_params_do_not_shadow_exception_args():
    c = Revert.custom("GasPriceTooHigh", 10, b"\x01")
    assert c.params == (10, b"\x01")
    assert c.data["params"] == [10, "0x01"]
    assert isinstance(c, Exception)


def test_failure_fields():
    assert failure_fields(Revert.custom("NumberTooLarge", 2_000_000)) == {
        "error": "NumberTooLarge",
        "params": [2_000_000],
    }
    assert failure_fields(Revert.error("too early")) == {"error": "Error", "reason": "too early"}
    assert failure_fields(Revert.panic(PANIC_ARITHMETIC))["params"] == [0x11]
    assert failure_fields(OOG())["error"] == "OUT_OF_GAS"
    assert failure_fields(InvalidAccess("nope", op="call")) == {"error": "INVALID_ACCESS", "message": "nope"}
