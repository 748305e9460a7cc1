"""
devchain.config — chain parameters, gas schedule and numeric caps.

This module centralizes configuration for the in-process development chain.
It has NO third-party deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (DEVCHAIN_*)
  2) Hardcoded safe defaults below

Key env vars:
  - DEVCHAIN_CHAIN_ID           (int)   default: 1337
  - DEVCHAIN_ACCOUNTS           (int)   default: 10
  - DEVCHAIN_INITIAL_BALANCE    (int)   default: 10_000 ether (in wei)
  - DEVCHAIN_GENESIS_TIMESTAMP  (int)   default: 1_700_000_000
  - DEVCHAIN_BLOCK_INTERVAL     (int)   default: 1 (seconds between automined blocks)
  - DEVCHAIN_GAS_LIMIT          (int)   default: 30_000_000 (per call)
  - DEVCHAIN_GAS_PRICE          (int)   default: 1 gwei
  - DEVCHAIN_MAX_CALL_DEPTH     (int)   default: 64
  - DEVCHAIN_LOG_LEVEL          (str)   default: WARNING (used by the CLI)

Usage:
    from devchain.config import load_config
    CFG = load_config()
    chain = DevChain(config=CFG)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict

ETHER = 10**18
GWEI = 10**9


# ----------------------------- helpers ---------------------------------------


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    return raw.strip() if raw and raw.strip() else default


# ------------------------------- gas -----------------------------------------


@dataclass(frozen=True)
class GasSchedule:
    """Flat per-operation gas costs charged by the host."""

    tx_base: int = 21_000
    create: int = 32_000
    call: int = 700
    sload: int = 2_100
    sstore_set: int = 20_000
    sstore_reset: int = 2_900
    log_base: int = 375
    log_per_arg: int = 375
    value_transfer: int = 9_000

    def as_dict(self) -> Dict[str, int]:
        return {
            "tx_base": self.tx_base,
            "create": self.create,
            "call": self.call,
            "sload": self.sload,
            "sstore_set": self.sstore_set,
            "sstore_reset": self.sstore_reset,
            "log_base": self.log_base,
            "log_per_arg": self.log_per_arg,
            "value_transfer": self.value_transfer,
        }


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    chain_id: int
    accounts: int
    initial_balance: int
    genesis_timestamp: int
    block_interval: int
    gas_limit: int
    gas_price: int
    max_call_depth: int
    log_level: str
    gas: GasSchedule = field(default_factory=GasSchedule)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "chain_id": self.chain_id,
            "accounts": self.accounts,
            "initial_balance": self.initial_balance,
            "genesis_timestamp": self.genesis_timestamp,
            "block_interval": self.block_interval,
            "gas_limit": self.gas_limit,
            "gas_price": self.gas_price,
            "max_call_depth": self.max_call_depth,
            "log_level": self.log_level,
            "gas": self.gas.as_dict(),
        }


@lru_cache(maxsize=1)
def load_config() -> ChainConfig:
    """
    Build and cache a ChainConfig from environment + safe defaults.
    """
    return ChainConfig(
        chain_id=_env_int("DEVCHAIN_CHAIN_ID", 1337, min_v=1, max_v=2**63 - 1),
        accounts=_env_int("DEVCHAIN_ACCOUNTS", 10, min_v=1, max_v=1_000),
        initial_balance=_env_int("DEVCHAIN_INITIAL_BALANCE", 10_000 * ETHER, min_v=0, max_v=2**256 - 1),
        genesis_timestamp=_env_int("DEVCHAIN_GENESIS_TIMESTAMP", 1_700_000_000, min_v=0, max_v=2**63 - 1),
        block_interval=_env_int("DEVCHAIN_BLOCK_INTERVAL", 1, min_v=1, max_v=86_400),
        gas_limit=_env_int("DEVCHAIN_GAS_LIMIT", 30_000_000, min_v=21_000, max_v=2**63 - 1),
        gas_price=_env_int("DEVCHAIN_GAS_PRICE", 1 * GWEI, min_v=0, max_v=2**256 - 1),
        max_call_depth=_env_int("DEVCHAIN_MAX_CALL_DEPTH", 64, min_v=1, max_v=1024),
        log_level=_env_str("DEVCHAIN_LOG_LEVEL", "WARNING").upper(),
    )


__all__ = ["ETHER", "GWEI", "GasSchedule", "ChainConfig", "load_config"]
