# -*- coding: utf-8 -*-
"""
Hypothesis settings and strategies for the property tests.

Each example deploys onto a fresh chain, so example counts stay small and
deadlines are disabled. Pick a profile with HYPOTHESIS_PROFILE; with CI set
the derandomized "ci" profile is used, otherwise "dev".
"""
from __future__ import annotations

import os

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

U256_MAX = 2**256 - 1

settings.register_profile(
    "dev",
    max_examples=50,
    deadline=None,
    suppress_health_check=(HealthCheck.too_slow,),
)
settings.register_profile(
    "ci",
    settings.get_profile("dev"),
    max_examples=100,
    derandomize=True,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE") or ("ci" if os.getenv("CI") else "dev"))


def uint256(min_value: int = 0, max_value: int = U256_MAX):
    return st.integers(min_value=min_value, max_value=max_value)


def storage_keys():
    """Non-empty raw storage keys."""
    return st.binary(min_size=1, max_size=32)


__all__ = ["U256_MAX", "given", "st", "uint256", "storage_keys"]
