"""
devchain — deterministic in-process chain for running Python contracts.

Quick start:

    from devchain import DevChain
    from contracts.examples import ModifiersAndAccessDemo

    chain = DevChain()
    owner, alice = chain.accounts[:2]
    demo = chain.deploy(ModifiersAndAccessDemo, sender=owner)
    demo.add_authorized_user(alice)
    demo.connect(alice).restricted_update(500_000)
    assert demo.stored_value() == 500_000
"""

from __future__ import annotations

from .chain import Block, CallContext, ContractHandle, DevChain, Receipt
from .config import ChainConfig, GasSchedule, load_config
from .contract import Contract, external, payable, pure, view
from .errors import OOG, ExecError, InvalidAccess, Revert
from .version import __version__

__all__ = [
    "__version__",
    "Block",
    "CallContext",
    "ContractHandle",
    "DevChain",
    "Receipt",
    "ChainConfig",
    "GasSchedule",
    "load_config",
    "Contract",
    "external",
    "payable",
    "pure",
    "view",
    "ExecError",
    "OOG",
    "Revert",
    "InvalidAccess",
]
