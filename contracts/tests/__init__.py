# -*- coding: utf-8 -*-
"""
contracts.tests
================

Contract-focused tests. Every test runs against a fresh in-process devchain
built from the default ``DEVCHAIN_*`` configuration.
"""
from __future__ import annotations
