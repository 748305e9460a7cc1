"""
devchain.demos — scripted walkthroughs of the demo contracts.

Each scenario deploys one contract on the given chain, drives it through a
short story and returns a JSON-friendly summary. The CLI runs them on a fresh
chain (``devchain demo <name>``); tests use them as end-to-end smoke checks.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from contracts.examples import (
    AddFiveStorage,
    DataTypesDemo,
    FunctionsVisibilityDemo,
    FundMe,
    MathUtilsDemo,
    ModifiersAndAccessDemo,
    SimpleStorage,
    StorageFactory,
    StructsAndMappingsDemo,
)

from .chain import DevChain, Receipt
from .config import ETHER
from .context import to_hex
from .errors import failure_fields

log = logging.getLogger(__name__)

Scenario = Callable[[DevChain], Dict[str, Any]]


def _outcome(receipt: Receipt) -> Dict[str, Any]:
    out: Dict[str, Any] = {"ok": receipt.ok, "gasUsed": receipt.gas_used, "block": receipt.block_number}
    if receipt.error is not None:
        out.update(failure_fields(receipt.error))
    return out


def simple_storage(chain: DevChain) -> Dict[str, Any]:
    c = chain.deploy(SimpleStorage)
    log.info("SimpleStorage deployed at %s", to_hex(c.address))
    c.store(42)
    c.add_person("Alice", 25)
    c.add_person("Bob", 30)
    return {
        "contract": to_hex(c.address),
        "retrieve": c.retrieve(),
        "people": [list(c.get_person(i)) for i in range(c.get_people_count())],
        "aliceFavorite": c.name_to_favorite_number("Alice"),
    }


def add_five(chain: DevChain) -> Dict[str, Any]:
    c = chain.deploy(AddFiveStorage)
    c.store(10)
    return {"contract": to_hex(c.address), "stored": 10, "retrieve": c.retrieve()}


def storage_factory(chain: DevChain) -> Dict[str, Any]:
    f = chain.deploy(StorageFactory)
    f.create_simple_storage_contract()
    f.create_simple_storage_contract()
    f.sf_store(0, 11)
    f.sf_store(1, 22)
    return {
        "factory": to_hex(f.address),
        "children": [to_hex(f.list_of_simple_storage_contracts(i)) for i in range(f.get_contract_count())],
        "values": [f.sf_get(0), f.sf_get(1)],
    }


def fund_me(chain: DevChain) -> Dict[str, Any]:
    owner, alice, bob = chain.accounts[:3]
    c = chain.deploy(FundMe, sender=owner)
    too_little = c.connect(alice).fund(value=2 * ETHER // 1000, check=False)
    c.connect(alice).fund(value=3 * ETHER // 1000)
    c.connect(bob).send_value(4 * ETHER // 1000)
    funded = {
        "alice": c.get_address_to_amount_funded(alice),
        "bob": c.get_address_to_amount_funded(bob),
    }
    balance_before = c.balance
    not_owner = c.connect(alice).withdraw(check=False)
    c.withdraw()
    return {
        "contract": to_hex(c.address),
        "price": c.get_price(),
        "tooLittle": _outcome(too_little),
        "funded": funded,
        "raised": balance_before,
        "withdrawByNonOwner": _outcome(not_owner),
        "balanceAfterWithdraw": c.balance,
    }


def modifiers(chain: DevChain) -> Dict[str, Any]:
    owner, alice, bob = chain.accounts[:3]
    demo = chain.deploy(ModifiersAndAccessDemo, sender=owner)
    steps: List[Dict[str, Any]] = []

    def step(label: str, receipt: Receipt) -> None:
        steps.append({"step": label, **_outcome(receipt)})
        log.info("%s -> %s", label, "ok" if receipt.ok else receipt.error)

    step("owner adds alice", demo.add_authorized_user(alice, check=False))
    step("alice restrictedUpdate(500000)", demo.connect(alice).restricted_update(500_000, check=False))
    step("alice restrictedUpdate(2000000)", demo.connect(alice).restricted_update(2_000_000, check=False))
    step("bob restrictedUpdate(100)", demo.connect(bob).restricted_update(100, check=False))
    step("timeRestrictedFunction (early)", demo.time_restricted_function(check=False))
    chain.increase_time(7_200)
    chain.mine()
    step("timeRestrictedFunction (+2h)", demo.time_restricted_function(check=False))
    step(
        "gasPriceRestrictedFunction @ 100 gwei",
        demo.gas_price_restricted_function(100, gas_price=100 * 10**9, check=False),
    )
    return {
        "contract": to_hex(demo.address),
        "owner": to_hex(demo.owner()),
        "status": demo.current_status(),
        "storedValue": demo.stored_value(),
        "maxGasPrice": demo.get_max_gas_price(),
        "steps": steps,
    }


def math_utils(chain: DevChain) -> Dict[str, Any]:
    c = chain.deploy(MathUtilsDemo)
    timestamp, number, coinbase = c.get_block_info()
    return {
        "contract": to_hex(c.address),
        "add(5,3)": c.add(5, 3),
        "typeLimits": [str(v) for v in c.get_type_limits()],
        "blockInfo": {"timestamp": timestamp, "number": number, "coinbase": to_hex(coinbase)},
    }



def visibility(chain: DevChain) -> Dict[str, Any]:
    c = chain.deploy(FunctionsVisibilityDemo)
    hidden = chain.transact(c.address, "_internal_function")
    return {
        "contract": to_hex(c.address),
        "publicFunction": c.public_function(),
        "externalFunction": c.external_function(),
        "callExternalFunction": c.call_external_function(),
        "demonstrateVisibility": list(c.demonstrate_visibility()),
        "exported": sorted(FunctionsVisibilityDemo.abi()),
        "internalFromOutside": _outcome(hidden),
    }


def data_types(chain: DevChain) -> Dict[str, Any]:
    c = chain.deploy(DataTypesDemo)
    defaults = {
        "myBool": c.my_bool(),
        "isActive": c.is_active(),
        "myUint256": c.my_uint256(),
        "myInt256": c.my_int256(),
        "myAddress": to_hex(c.my_address()),
        "myBytes32": to_hex(c.my_bytes32()),
        "myString": c.my_string(),
        "myDynamicBytes": to_hex(c.my_dynamic_bytes()),
        "fixedArray0": c.fixed_array(0),
    }
    c.demonstrate_arrays()
    return {
        "contract": to_hex(c.address),
        "defaults": defaults,
        "myArray": [c.my_array(i) for i in range(c.my_array_length())],
        "fixedArray": [c.fixed_array(0), c.fixed_array(1)],
    }


def structs(chain: DevChain) -> Dict[str, Any]:
    alice, bob = chain.accounts[1:3]
    c = chain.deploy(StructsAndMappingsDemo)
    added = c.connect(alice).add_person("Alice", 25)
    c.connect(bob).add_person("Bob", 30)
    c.connect(alice).update_age(26)
    empty = c.connect(bob).add_person("", 50, check=False)
    person = c.address_to_person(alice)
    return {
        "contract": to_hex(c.address),
        "peopleCount": c.get_people_count(),
        "alice": {
            "name": person.name,
            "age": person.age,
            "isActive": person.is_active,
            "wallet": to_hex(person.wallet),
        },
        "personAdded": [e.to_dict()["args"] for e in added.events],
        "numberExists": {"25": c.number_exists(25), "999": c.number_exists(999)},
        "emptyName": _outcome(empty),
    }


SCENARIOS: Dict[str, Scenario] = {
    "simple-storage": simple_storage,
    "add-five": add_five,
    "storage-factory": storage_factory,
    "fund-me": fund_me,
    "modifiers": modifiers,
    "math-utils": math_utils,
    "visibility": visibility,
    "data-types": data_types,
    "structs": structs,
}


def run(name: str, chain: DevChain) -> Dict[str, Any]:
    try:
        scenario = SCENARIOS[name]
    except KeyError:
        raise KeyError(f"unknown demo {name!r}; choose from {', '.join(sorted(SCENARIOS))}") from None
    log.info("running demo %s", name)
    return scenario(chain)


__all__ = ["SCENARIOS", "run"]
