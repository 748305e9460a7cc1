# -*- coding: utf-8 -*-
"""
contracts.examples
==================

Demo contracts. Each module defines one ``Contract`` subclass:

- ``modifiers_access.ModifiersAndAccessDemo``        policy-gated store
- ``simple_storage.SimpleStorage``                   number + people registry
- ``add_five_storage.AddFiveStorage``                ``store`` override (+5)
- ``storage_factory.StorageFactory``                 deploys and drives SimpleStorage children
- ``fund_me.FundMe``                                 crowdfunding with a USD minimum
- ``math_utils.MathUtilsDemo``                       checked math, type limits, block info
- ``functions_visibility.FunctionsVisibilityDemo``   exported vs internal/private methods
- ``data_types.DataTypesDemo``                       type default values, arrays
- ``structs_mappings.StructsAndMappingsDemo``        struct records behind mappings
"""
from __future__ import annotations

from .add_five_storage import AddFiveStorage
from .data_types import DataTypesDemo
from .functions_visibility import FunctionsVisibilityDemo
from .fund_me import FundMe
from .math_utils import MathUtilsDemo
from .modifiers_access import ModifiersAndAccessDemo
from .simple_storage import SimpleStorage
from .storage_factory import StorageFactory
from .structs_mappings import StructsAndMappingsDemo

__all__ = [
    "AddFiveStorage",
    "DataTypesDemo",
    "FunctionsVisibilityDemo",
    "FundMe",
    "MathUtilsDemo",
    "ModifiersAndAccessDemo",
    "SimpleStorage",
    "StorageFactory",
    "StructsAndMappingsDemo",
]
