# -*- coding: utf-8 -*-
"""
contracts
=========

Contract library and teaching demos that run on the in-process devchain.

- ``contracts.stdlib``   reusable building blocks (checked math, ownership,
  authorized sets, ordered gates, reentrancy guard, storage codecs).
- ``contracts.examples`` the demo contracts, with ``ModifiersAndAccessDemo``
  (a policy-gated store) at the centre.
"""
