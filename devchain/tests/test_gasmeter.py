from __future__ import annotations

import pytest

from devchain.errors import OOG, ExecError
from devchain.gasmeter import GasMeter


def test_consume_tracks_used_and_remaining():
    gm = GasMeter(limit=100)
    gm.consume(30)
    gm.consume(0)
    assert gm.used == 30
    assert gm.remaining == 70
    assert gm.limit == 100


def test_exact_limit_is_allowed():
    gm = GasMeter(limit=50)
    gm.consume(50)
    assert gm.remaining == 0


def test_oog_charges_nothing():
    gm = GasMeter(limit=50)
    gm.consume(40)
    with pytest.raises(OOG) as ei:
        gm.consume(11)
    assert gm.used == 40
    assert ei.value.code == "OUT_OF_GAS"
    assert ei.value.data == {"need": 11, "used": 40, "limit": 50}


@pytest.mark.parametrize("bad", [-1, 1.5, "10"])
def test_rejects_bad_amounts(bad):
    gm = GasMeter(limit=10)
    with pytest.raises(ExecError):
        gm.consume(bad)  # type: ignore[arg-type]


def test_rejects_negative_limit():
    with pytest.raises(ExecError):
        GasMeter(limit=-1)
