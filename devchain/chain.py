"""
devchain.chain — deterministic in-process chain that executes contracts.

The chain owns all persistent state (balances, nonces, code, storage) and the
block clock. Contracts never hold state themselves; each call receives a
`CallContext` exposing caller identity, block/tx environment, its own
storage, event emission, value transfer, nested calls and contract creation.

Execution model
---------------
- One call at a time. A call may synchronously re-enter any contract
  (including itself) through `ctx.call`, up to `max_call_depth`.
- Every frame runs inside a journal checkpoint: on success its effects merge
  into the caller's frame, on failure they are discarded. A transaction is
  therefore all-or-nothing unless contract code catches a sub-call's revert.
- Every transaction (successful or not) and every deployment mines one
  block. `call()` executes read-only against the latest block and never
  persists.

Dev helpers mirror what a local dev node offers over RPC: `increase_time`,
`set_next_block_timestamp`, `mine`, `get_storage_at`, `set_storage_at`,
`snapshot` / `revert_to`.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from .config import ChainConfig, load_config
from .context import BlockEnv, ContextError, TxEnv, ZERO_ADDRESS, to_address, to_hex
from .contract import Contract, MethodSpec, Storage, bind_arguments
from .errors import ExecError, InvalidAccess, Revert, failure_fields
from .events import Event, make_event
from .gasmeter import GasMeter
from .journal import Journal, WorldState

log = logging.getLogger(__name__)

RECEIVE = "receive"


def _sha3(*parts: bytes) -> bytes:
    h = hashlib.sha3_256()
    for p in parts:
        h.update(p)
    return h.digest()


def derive_account(index: int) -> bytes:
    """Deterministic 20-byte signer address for account `index`."""
    return _sha3(b"devchain:account:", index.to_bytes(4, "big"))[-20:]


def derive_contract_address(creator: bytes, nonce: int) -> bytes:
    """Address of the contract `creator` deploys with `nonce`."""
    return _sha3(b"devchain:create:", creator, nonce.to_bytes(8, "big"))[-20:]


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Block:
    height: int
    timestamp: int
    coinbase: bytes
    tx_hashes: Tuple[bytes, ...] = ()


@dataclass
class Receipt:
    """Outcome of a mined transaction or deployment."""

    tx_hash: bytes
    status: int
    block_number: int
    block_timestamp: int
    sender: bytes
    to: Optional[bytes]
    method: Optional[str]
    gas_used: int
    gas_price: int
    return_value: Any = None
    contract_address: Optional[bytes] = None
    events: List[Event] = field(default_factory=list)
    error: Optional[ExecError] = None

    @property
    def ok(self) -> bool:
        return self.status == 1

    @property
    def fee(self) -> int:
        return self.gas_used * self.gas_price

    def raise_for_status(self) -> "Receipt":
        if self.error is not None:
            raise self.error
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "txHash": to_hex(self.tx_hash),
            "status": self.status,
            "blockNumber": self.block_number,
            "blockTimestamp": self.block_timestamp,
            "from": to_hex(self.sender),
            "to": to_hex(self.to) if self.to is not None else None,
            "method": self.method,
            "gasUsed": self.gas_used,
            "gasPrice": self.gas_price,
            "contractAddress": to_hex(self.contract_address) if self.contract_address else None,
            "events": [e.to_dict() for e in self.events],
            "error": self.error.to_dict() if self.error is not None else None,
            "failure": failure_fields(self.error) if self.error is not None else None,
        }


# =============================================================================
# Call context
# =============================================================================


class CallContext:
    """
    Everything a contract method may consume from its host.

    Attributes
    ----------
    sender:  immediate caller (an account or a contract)
    origin:  account that signed the transaction
    value:   wei sent with this call
    this:    address of the executing contract
    block:   BlockEnv of the block being built (or the latest, for calls)
    tx:      TxEnv (gas price is the per-call fee signal)
    storage: Storage bound to `this`
    """

    __slots__ = ("_exe", "sender", "value", "this", "readonly", "storage")

    def __init__(self, exe: "_Execution", *, sender: bytes, this: bytes, value: int, readonly: bool) -> None:
        self._exe = exe
        self.sender = sender
        self.this = this
        self.value = value
        self.readonly = readonly
        self.storage = Storage(exe.journal, this, exe.meter, exe.config.gas, readonly=readonly)

    @property
    def origin(self) -> bytes:
        return self._exe.tx.origin

    @property
    def block(self) -> BlockEnv:
        return self._exe.block

    @property
    def tx(self) -> TxEnv:
        return self._exe.tx

    @property
    def gas_left(self) -> int:
        return self._exe.meter.remaining

    def emit(self, name: str, args: Dict[str, Any]) -> None:
        if self.readonly:
            raise InvalidAccess("event emitted in a read-only call", op="emit")
        event = make_event(self.this, name, args)
        gas = self._exe.config.gas
        self._exe.meter.consume(gas.log_base + gas.log_per_arg * len(event.args))
        self._exe.journal.emit(event)

    def balance(self, address: Optional[bytes] = None) -> int:
        return self._exe.journal.balance_of(self.this if address is None else to_address(address))

    def transfer(self, to: bytes, amount: int) -> None:
        """Send `amount` wei from this contract (runs `to`'s receive hook)."""
        self._exe.run_call(self.this, to_address(to), None, (), amount, readonly=self.readonly)

    def call(self, target: Any, method: str, *args: Any, value: int = 0) -> Any:
        """Synchronous sub-call; the callee sees this contract as `sender`."""
        return self._exe.run_call(
            self.this, to_address(target), method, args, value, readonly=self.readonly
        )

    def create(self, contract_cls: Type[Contract], *args: Any, value: int = 0) -> bytes:
        """Deploy a child contract; returns its address."""
        if self.readonly:
            raise InvalidAccess("contract creation in a read-only call", op="create")
        return self._exe.run_create(self.this, contract_cls, args, value)


# =============================================================================
# Execution of one transaction / read-only call
# =============================================================================


class _Execution:
    def __init__(
        self,
        config: ChainConfig,
        journal: Journal,
        meter: GasMeter,
        block: BlockEnv,
        tx: TxEnv,
    ) -> None:
        self.config = config
        self.journal = journal
        self.meter = meter
        self.block = block
        self.tx = tx
        self.depth = 0

    def _enter(self, op: str, address: bytes) -> None:
        if self.depth >= self.config.max_call_depth:
            raise InvalidAccess("max call depth exceeded", op=op, address=to_hex(address))
        if self.depth > 0:
            self.meter.consume(self.config.gas.call)

    def _move_value(self, frm: bytes, to: bytes, value: int) -> None:
        if value < 0:
            raise InvalidAccess("negative value", op="transfer")
        if value == 0:
            return
        if self.journal.balance_of(frm) < value:
            raise Revert.error("insufficient balance for transfer")
        self.meter.consume(self.config.gas.value_transfer)
        self.journal.sub_balance(frm, value)
        self.journal.add_balance(to, value)

    def run_call(
        self,
        sender: bytes,
        to: bytes,
        method: Optional[str],
        args: Sequence[Any],
        value: int,
        *,
        readonly: bool = False,
    ) -> Any:
        self._enter("call", to)
        code = self.journal.code_at(to)
        spec: Optional[MethodSpec] = None
        if code is not None:
            spec = code.method_spec(method or RECEIVE)
            if spec is None:
                if method is None:
                    raise Revert.error("contract does not accept plain transfers")
                raise InvalidAccess(f"unknown method {method!r}", op="call", address=to_hex(to))
            if value and not spec.payable:
                raise InvalidAccess(f"method {spec.name!r} is not payable", op="call", address=to_hex(to))
            if readonly and not spec.readonly:
                raise InvalidAccess(f"state-changing method {spec.name!r} in a read-only call", op="call")
        elif method is not None:
            raise InvalidAccess(f"no contract at {to_hex(to)}", op="call", address=to_hex(to))

        self.journal.begin()
        self.depth += 1
        try:
            if readonly and value:
                raise InvalidAccess("value transfer in a read-only call", op="call")
            self._move_value(sender, to, value)
            if code is None:
                result = None
            else:
                ctx = CallContext(self, sender=sender, this=to, value=value, readonly=readonly or spec.readonly)
                log.debug("call %s.%s from %s depth=%d", code.__name__, spec.name, to_hex(sender), self.depth)
                fn = getattr(code(to), spec.name)
                bind_arguments(fn, ctx, args)
                result = fn(ctx, *args)
        except BaseException as exc:
            self.journal.revert()
            if isinstance(exc, ExecError):
                log.debug("frame reverted at depth=%d: %s", self.depth, exc)
            raise
        else:
            self.journal.commit()
            return result
        finally:
            self.depth -= 1

    def run_create(
        self,
        sender: bytes,
        contract_cls: Type[Contract],
        args: Sequence[Any],
        value: int,
    ) -> bytes:
        if not (isinstance(contract_cls, type) and issubclass(contract_cls, Contract)):
            raise InvalidAccess("create expects a Contract subclass", op="create")
        self._enter("create", sender)
        self.journal.begin()
        self.depth += 1
        try:
            nonce = self.journal.bump_nonce(sender)
            address = derive_contract_address(sender, nonce)
            if self.journal.code_at(address) is not None:
                raise InvalidAccess("contract address collision", op="create", address=to_hex(address))
            self.meter.consume(self.config.gas.create)
            self.journal.set_code(address, contract_cls)
            self._move_value(sender, address, value)
            ctx = CallContext(self, sender=sender, this=address, value=value, readonly=False)
            init = contract_cls(address).constructor
            bind_arguments(init, ctx, args)
            init(ctx, *args)
        except BaseException:
            self.journal.revert()
            raise
        else:
            self.journal.commit()
            log.debug("created %s at %s", contract_cls.__name__, to_hex(address))
            return address
        finally:
            self.depth -= 1


# =============================================================================
# Chain
# =============================================================================


class DevChain:
    """
    In-memory development chain.

    Typical usage:
        chain = DevChain()
        owner, alice = chain.accounts[:2]
        demo = chain.deploy(ModifiersAndAccessDemo, sender=owner)
        demo.add_authorized_user(alice)
        receipt = demo.connect(alice).restricted_update(500_000)
        assert demo.stored_value() == 500_000
    """

    def __init__(self, config: Optional[ChainConfig] = None) -> None:
        self.config = config or load_config()
        self._world = WorldState()
        self.accounts: List[bytes] = [derive_account(i) for i in range(self.config.accounts)]
        for acct in self.accounts:
            self._world.balances[acct] = self.config.initial_balance
        self.coinbase = derive_account(2**32 - 1)
        self._blocks: List[Block] = [
            Block(height=0, timestamp=self.config.genesis_timestamp, coinbase=self.coinbase)
        ]
        self._receipts: Dict[bytes, Receipt] = {}
        self._time_offset = 0
        self._next_timestamp: Optional[int] = None
        self._snapshots: Dict[int, Tuple[Any, ...]] = {}
        self._snapshot_seq = 0

    # ------------------------------------------------------------------ #
    # Blocks & clock
    # ------------------------------------------------------------------ #

    @property
    def latest_block(self) -> Block:
        return self._blocks[-1]

    @property
    def block_number(self) -> int:
        return self.latest_block.height

    @property
    def timestamp(self) -> int:
        return self.latest_block.timestamp

    def increase_time(self, seconds: int) -> int:
        """Shift the clock: the next block is `seconds` later than it would be."""
        if not isinstance(seconds, int) or seconds < 0:
            raise ValueError("seconds must be a non-negative int")
        self._time_offset += seconds
        return self._time_offset

    def set_next_block_timestamp(self, timestamp: int) -> None:
        """Pin the exact timestamp of the next mined block."""
        if not isinstance(timestamp, int) or timestamp <= self.timestamp:
            raise ContextError(
                f"next timestamp must be greater than the latest ({self.timestamp}), got {timestamp}"
            )
        self._next_timestamp = timestamp

    def _pending_block_env(self) -> BlockEnv:
        if self._next_timestamp is not None:
            ts = self._next_timestamp
        else:
            ts = self.timestamp + self.config.block_interval + self._time_offset
        return BlockEnv(
            height=self.block_number + 1,
            timestamp=ts,
            coinbase=self.coinbase,
            chain_id=self.config.chain_id,
        )

    def _latest_block_env(self) -> BlockEnv:
        b = self.latest_block
        return BlockEnv(height=b.height, timestamp=b.timestamp, coinbase=b.coinbase, chain_id=self.config.chain_id)

    def _seal(self, env: BlockEnv, tx_hashes: Tuple[bytes, ...] = ()) -> Block:
        block = Block(height=env.height, timestamp=env.timestamp, coinbase=env.coinbase, tx_hashes=tx_hashes)
        self._blocks.append(block)
        self._next_timestamp = None
        self._time_offset = 0
        log.debug("mined block %d at %d (%d txs)", block.height, block.timestamp, len(tx_hashes))
        return block

    def mine(self, blocks: int = 1) -> Block:
        """Mine empty blocks; returns the last one."""
        if blocks < 1:
            raise ValueError("blocks must be >= 1")
        for _ in range(blocks):
            block = self._seal(self._pending_block_env())
        return block

    # ------------------------------------------------------------------ #
    # State inspection / dev helpers
    # ------------------------------------------------------------------ #

    def get_balance(self, address: Any) -> int:
        return self._world.balances.get(to_address(address), 0)

    def get_nonce(self, address: Any) -> int:
        return self._world.nonces.get(to_address(address), 0)

    def code_at(self, address: Any) -> Optional[Type[Contract]]:
        return self._world.code.get(to_address(address))

    def get_storage_at(self, address: Any, key: bytes) -> bytes:
        return self._world.storage.get(to_address(address), {}).get(bytes(key), b"")

    def set_storage_at(self, address: Any, key: bytes, value: bytes) -> None:
        """Overwrite one storage slot outside of any transaction."""
        slots = self._world.storage.setdefault(to_address(address), {})
        if value:
            slots[bytes(key)] = bytes(value)
        else:
            slots.pop(bytes(key), None)

    def get_receipt(self, tx_hash: bytes) -> Optional[Receipt]:
        return self._receipts.get(bytes(tx_hash))

    def snapshot(self) -> int:
        """Capture the whole chain state; returns an id for `revert_to`."""
        self._snapshot_seq += 1
        self._snapshots[self._snapshot_seq] = (
            self._world.copy(),
            list(self._blocks),
            dict(self._receipts),
            self._time_offset,
            self._next_timestamp,
        )
        return self._snapshot_seq

    def revert_to(self, snapshot_id: int) -> bool:
        """Restore a snapshot. Later snapshots are dropped; returns False if unknown."""
        saved = self._snapshots.get(snapshot_id)
        if saved is None:
            return False
        world, blocks, receipts, offset, next_ts = saved
        self._world = world.copy()
        self._blocks = list(blocks)
        self._receipts = dict(receipts)
        self._time_offset = offset
        self._next_timestamp = next_ts
        for sid in [s for s in self._snapshots if s >= snapshot_id]:
            del self._snapshots[sid]
        return True

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #

    def _sender(self, sender: Any) -> bytes:
        return self.accounts[0] if sender is None else to_address(sender)

    def _execute(
        self,
        *,
        sender: bytes,
        to: Optional[bytes],
        method: Optional[str],
        args: Sequence[Any],
        value: int,
        gas_price: Optional[int],
        gas_limit: Optional[int],
        contract_cls: Optional[Type[Contract]] = None,
    ) -> Receipt:
        cfg = self.config
        gas_price = cfg.gas_price if gas_price is None else gas_price
        gas_limit = cfg.gas_limit if gas_limit is None else gas_limit
        nonce = self._world.nonces.get(sender, 0)
        if self._world.balances.get(sender, 0) < value + gas_limit * gas_price:
            raise InvalidAccess(
                "sender cannot cover value + gas_limit * gas_price", op="tx", address=to_hex(sender)
            )

        env = self._pending_block_env()
        tx_hash = _sha3(
            b"devchain:tx:",
            cfg.chain_id.to_bytes(8, "big"),
            sender,
            nonce.to_bytes(8, "big"),
            to or b"",
            (method or "").encode("utf-8"),
        )
        tx = TxEnv(tx_hash=tx_hash, origin=sender, gas_price=gas_price, gas_limit=gas_limit, nonce=nonce)
        journal = Journal(self._world)
        meter = GasMeter(limit=gas_limit)
        exe = _Execution(cfg, journal, meter, env, tx)

        if contract_cls is None:
            journal.bump_nonce(sender)

        result: Any = None
        created: Optional[bytes] = None
        error: Optional[ExecError] = None
        try:
            meter.consume(cfg.gas.tx_base)
            if contract_cls is not None:
                created = exe.run_create(sender, contract_cls, args, value)
                result = created
            else:
                result = exe.run_call(sender, to, method, args, value)  # type: ignore[arg-type]
        except ExecError as err:
            error = err
            if contract_cls is not None:
                journal.bump_nonce(sender)
            log.info("tx %s reverted: %s", to_hex(tx_hash)[:18], err)

        events = journal.events() if error is None else []
        fee = meter.used * gas_price
        journal.sub_balance(sender, fee)
        journal.add_balance(env.coinbase, fee)
        journal.commit()

        self._seal(env, (tx_hash,))
        receipt = Receipt(
            tx_hash=tx_hash,
            status=0 if error is not None else 1,
            block_number=env.height,
            block_timestamp=env.timestamp,
            sender=sender,
            to=to,
            method=method,
            gas_used=meter.used,
            gas_price=gas_price,
            return_value=result,
            contract_address=created,
            events=events,
            error=error,
        )
        self._receipts[tx_hash] = receipt
        return receipt

    def deploy(
        self,
        contract_cls: Type[Contract],
        *args: Any,
        sender: Any = None,
        value: int = 0,
        gas_price: Optional[int] = None,
        gas_limit: Optional[int] = None,
    ) -> "ContractHandle":
        """Deploy `contract_cls`; raises the constructor's error on failure."""
        frm = self._sender(sender)
        receipt = self._execute(
            sender=frm,
            to=None,
            method=None,
            args=args,
            value=value,
            gas_price=gas_price,
            gas_limit=gas_limit,
            contract_cls=contract_cls,
        )
        receipt.raise_for_status()
        assert receipt.contract_address is not None
        log.info("deployed %s at %s", contract_cls.__name__, to_hex(receipt.contract_address))
        return ContractHandle(self, receipt.contract_address, contract_cls, sender=frm, deploy_receipt=receipt)

    def transact(
        self,
        to: Any,
        method: Optional[str],
        *args: Any,
        sender: Any = None,
        value: int = 0,
        gas_price: Optional[int] = None,
        gas_limit: Optional[int] = None,
    ) -> Receipt:
        """Run and mine a state-changing call. Failures yield a status-0 receipt."""
        return self._execute(
            sender=self._sender(sender),
            to=to_address(to),
            method=method,
            args=args,
            value=value,
            gas_price=gas_price,
            gas_limit=gas_limit,
        )

    def call(self, to: Any, method: str, *args: Any, sender: Any = None, value: int = 0) -> Any:
        """Execute against the latest block without persisting anything."""
        frm = self._sender(sender)
        addr = to_address(to)
        env = self._latest_block_env()
        tx = TxEnv(
            tx_hash=b"",
            origin=frm,
            gas_price=self.config.gas_price,
            gas_limit=self.config.gas_limit,
            nonce=self._world.nonces.get(frm, 0),
        )
        exe = _Execution(self.config, Journal(self._world), GasMeter(limit=self.config.gas_limit), env, tx)
        return exe.run_call(frm, addr, method, args, value)

    def at(self, address: Any, contract_cls: Optional[Type[Contract]] = None) -> "ContractHandle":
        """Handle for an already deployed contract."""
        addr = to_address(address)
        cls = contract_cls or self.code_at(addr)
        if cls is None:
            raise InvalidAccess(f"no contract at {to_hex(addr)}", op="at")
        return ContractHandle(self, addr, cls)


# =============================================================================
# Handles
# =============================================================================


class _BoundMethod:
    __slots__ = ("_handle", "_spec")

    def __init__(self, handle: "ContractHandle", spec: MethodSpec) -> None:
        self._handle = handle
        self._spec = spec

    def __call__(
        self,
        *args: Any,
        value: int = 0,
        gas_price: Optional[int] = None,
        gas_limit: Optional[int] = None,
        check: bool = True,
    ) -> Any:
        h = self._handle
        if self._spec.readonly:
            return h.chain.call(h.address, self._spec.name, *args, sender=h.sender, value=value)
        receipt = h.chain.transact(
            h.address,
            self._spec.name,
            *args,
            sender=h.sender,
            value=value,
            gas_price=gas_price,
            gas_limit=gas_limit,
        )
        return receipt.raise_for_status() if check else receipt

    def call(self, *args: Any, value: int = 0) -> Any:
        """Simulate without mining (works for state-changing methods too)."""
        h = self._handle
        return h.chain.call(h.address, self._spec.name, *args, sender=h.sender, value=value)


class ContractHandle:
    """
    Attribute-style access to a deployed contract.

    Read-only methods return values; state-changing methods mine a
    transaction and return its Receipt (raising the error unless
    ``check=False``).
    """

    def __init__(
        self,
        chain: DevChain,
        address: bytes,
        contract_cls: Type[Contract],
        *,
        sender: Optional[bytes] = None,
        deploy_receipt: Optional[Receipt] = None,
    ) -> None:
        self.chain = chain
        self.address = address
        self.contract_cls = contract_cls
        self.sender = sender
        self.deploy_receipt = deploy_receipt

    def connect(self, sender: Any) -> "ContractHandle":
        """Same contract, different caller."""
        return ContractHandle(
            self.chain,
            self.address,
            self.contract_cls,
            sender=to_address(sender),
            deploy_receipt=self.deploy_receipt,
        )

    @property
    def balance(self) -> int:
        return self.chain.get_balance(self.address)

    def send_value(self, value: int, **kwargs: Any) -> Receipt:
        """Plain value transfer (runs the contract's `receive` method)."""
        return self.chain.transact(self.address, None, sender=self.sender, value=value, **kwargs)

    def __getattr__(self, name: str) -> _BoundMethod:
        if name.startswith("_"):
            raise AttributeError(name)
        spec = self.contract_cls.method_spec(name)
        if spec is None:
            raise AttributeError(f"{self.contract_cls.__name__} has no exported method {name!r}")
        return _BoundMethod(self, spec)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<{self.contract_cls.__name__} at {to_hex(self.address)}>"


__all__ = [
    "RECEIVE",
    "derive_account",
    "derive_contract_address",
    "Block",
    "Receipt",
    "CallContext",
    "DevChain",
    "ContractHandle",
    "ZERO_ADDRESS",
]
