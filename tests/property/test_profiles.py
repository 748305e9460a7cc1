# -*- coding: utf-8 -*-
"""Registered Hypothesis profiles."""
from __future__ import annotations

from hypothesis import settings

import tests.property  # noqa: F401  registers the profiles


def test_ci_profile_is_derandomized_dev_is_not():
    dev, ci = settings.get_profile("dev"), settings.get_profile("ci")
    assert dev.deadline is None and ci.deadline is None
    assert not dev.derandomize
    assert ci.derandomize
    assert ci.max_examples > dev.max_examples
