from __future__ import annotations

import pytest

from devchain.events import make_event
from devchain.journal import Journal, WorldState

A = b"\xaa" * 20
B = b"\xbb" * 20


def _world() -> WorldState:
    return WorldState(balances={A: 100}, storage={A: {b"k": b"v0"}})


def test_reads_fall_through_to_base():
    j = Journal(_world())
    assert j.balance_of(A) == 100
    assert j.balance_of(B) == 0
    assert j.storage_get(A, b"k") == b"v0"
    assert j.storage_get(A, b"missing") == b""


def test_revert_discards_top_layer_only():
    w = _world()
    j = Journal(w)
    j.storage_set(A, b"k", b"outer")
    j.begin()
    j.storage_set(A, b"k", b"inner")
    j.add_balance(B, 5)
    assert j.storage_get(A, b"k") == b"inner"
    j.revert()
    assert j.storage_get(A, b"k") == b"outer"
    assert j.balance_of(B) == 0
    # nothing reached the base yet
    assert w.storage[A][b"k"] == b"v0"


def test_nested_commit_then_root_commit_applies_to_base():
    w = _world()
    j = Journal(w)
    j.begin()
    j.storage_set(A, b"k2", b"x")
    j.sub_balance(A, 40)
    j.commit()
    j.commit()
    assert w.storage[A] == {b"k": b"v0", b"k2": b"x"}
    assert w.balances[A] == 60
    # the journal stays usable after a root commit
    assert j.depth() == 1


def test_empty_value_deletes_slot():
    w = _world()
    j = Journal(w)
    j.storage_set(A, b"k", b"")
    assert j.storage_get(A, b"k") == b""
    assert list(j.storage_items(A)) == []
    j.commit()
    assert b"k" not in w.storage[A]


def test_storage_items_sorted_with_overlay_precedence():
    j = Journal(_world())
    j.storage_set(A, b"b", b"2")
    j.begin()
    j.storage_set(A, b"a", b"1")
    j.storage_delete(A, b"k")
    assert list(j.storage_items(A)) == [(b"a", b"1"), (b"b", b"2")]


def test_negative_balance_rejected():
    j = Journal(_world())
    with pytest.raises(ValueError):
        j.sub_balance(A, 101)


def test_nonce_bump_returns_previous():
    j = Journal(WorldState())
    assert j.bump_nonce(A) == 0
    assert j.bump_nonce(A) == 1
    assert j.nonce_of(A) == 2


def test_events_follow_checkpoints():
    j = Journal(WorldState())
    j.emit(make_event(A, "Outer", {}))
    j.begin()
    j.emit(make_event(A, "Dropped", {}))
    j.revert()
    j.begin()
    j.emit(make_event(A, "Kept", {"n": 1}))
    j.commit()
    assert [e.name for e in j.events()] == ["Outer", "Kept"]


def test_world_copy_is_independent():
    w = _world()
    c = w.copy()
    c.storage[A][b"k"] = b"changed"
    c.balances[A] = 1
    assert w.storage[A][b"k"] == b"v0"
    assert w.balances[A] == 100


def test_non_bytes_key_rejected():
    j = Journal(WorldState())
    with pytest.raises(TypeError):
        j.storage_get(A, "k")  # type: ignore[arg-type]
