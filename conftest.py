"""
Repository-wide pytest setup.

- Pins reproducibility-friendly env defaults.
- Drops the cached devchain config between tests so ``monkeypatch.setenv``
  on DEVCHAIN_* variables takes effect.
"""
from __future__ import annotations

import os

import pytest

os.environ.setdefault("PYTHONHASHSEED", "0")
os.environ.setdefault("TZ", "UTC")

from devchain.config import load_config  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_devchain_config():
    load_config.cache_clear()
    yield
    load_config.cache_clear()
