"""devchain.version — package version.

Resolution order: DEVCHAIN_VERSION env → installed package metadata →
BASE_VERSION.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import metadata as importlib_metadata

BASE_VERSION = "0.1.0"
DIST_NAME = "devchain-modifiers-lab"


@lru_cache(maxsize=1)
def compute_version() -> str:
    env = os.getenv("DEVCHAIN_VERSION")
    if env and env.strip():
        return env.strip()
    try:
        return importlib_metadata.version(DIST_NAME)
    except importlib_metadata.PackageNotFoundError:
        return BASE_VERSION


__version__ = compute_version()

__all__ = ["__version__", "compute_version", "BASE_VERSION"]
