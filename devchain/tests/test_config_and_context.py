from __future__ import annotations

import pytest

from devchain.config import ETHER, GWEI, load_config
from devchain.context import (
    BlockEnv,
    ContextError,
    TxEnv,
    ZERO_ADDRESS,
    to_address,
    to_bytes,
    to_hex,
)


def test_defaults():
    cfg = load_config()
    assert cfg.chain_id == 1337
    assert cfg.accounts == 10
    assert cfg.initial_balance == 10_000 * ETHER
    assert cfg.gas_price == GWEI
    assert cfg.block_interval == 1
    assert cfg.log_level == "WARNING"


def test_env_overrides_and_clamping(monkeypatch):
    monkeypatch.setenv("DEVCHAIN_ACCOUNTS", "3")
    monkeypatch.setenv("DEVCHAIN_BLOCK_INTERVAL", "0")  # clamped to 1
    monkeypatch.setenv("DEVCHAIN_GAS_PRICE", "0x10")
    monkeypatch.setenv("DEVCHAIN_CHAIN_ID", "not-a-number")
    monkeypatch.setenv("DEVCHAIN_LOG_LEVEL", "debug")
    load_config.cache_clear()
    cfg = load_config()
    assert cfg.accounts == 3
    assert cfg.block_interval == 1
    assert cfg.gas_price == 16
    assert cfg.chain_id == 1337
    assert cfg.log_level == "DEBUG"


def test_as_dict(monkeypatch):
    monkeypatch.setenv("DEVCHAIN_BLOCK_INTERVAL", "12")
    d = load_config().as_dict()
    assert d["block_interval"] == 12
    assert d["gas"]["tx_base"] == 21_000


def test_address_coercion():
    raw = bytes(range(20))
    assert to_address(raw) == raw
    assert to_address(to_hex(raw)) == raw
    assert to_address(raw.hex()) == raw

    class Handle:
        address = raw

    assert to_address(Handle()) == raw
    with pytest.raises(ContextError):
        to_address(b"\x01" * 19)
    with pytest.raises(ContextError):
        to_bytes("0xabc")
    with pytest.raises(ContextError):
        to_bytes(12)  # type: ignore[arg-type]


def test_block_env_validation_and_roundtrip():
    env = BlockEnv(height=3, timestamp=1_700_000_003, coinbase=ZERO_ADDRESS, chain_id=1337)
    assert env.to_dict()["coinbase"] == "0x" + "00" * 20
    with pytest.raises(ContextError):
        BlockEnv(height=-1, timestamp=0, coinbase=ZERO_ADDRESS, chain_id=1)
    with pytest.raises(ContextError):
        BlockEnv(height=True, timestamp=0, coinbase=ZERO_ADDRESS, chain_id=1)  # type: ignore[arg-type]


def test_tx_env_to_dict():
    tx = TxEnv(tx_hash=b"\x01" * 32, origin=ZERO_ADDRESS, gas_price=GWEI, gas_limit=100_000, nonce=0)
    d = tx.to_dict()
    assert d["gas_price"] == GWEI
    assert d["origin"] == to_hex(ZERO_ADDRESS)
