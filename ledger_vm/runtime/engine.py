"""
ledger_vm.runtime.engine: atomic call execution for one contract instance.

An `Engine` binds a logic module to an address and an instance-owned
`Storage`. Every call is all-or-nothing:

    begin checkpoint ─► logic.fn(ctx, *args) ─┬─► ok   : commit writes, publish events
                                             └─► raise: revert writes, drop events, re-raise

Calls are fully serialized. A call that arrives while another call on the
same engine is still running (e.g. a callback re-entering the ledger) is
rejected with `ReentrancyError` before it can read or write anything.

Only names exported through the logic module's ``__all__`` are callable.
"""

from __future__ import annotations

import logging
import types
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ledger_vm.config import LedgerVmConfig, load_config
from ledger_vm.errors import ReentrancyError, UnknownFunction, VmError

from .context import CallContext, to_hex
from .events_api import Event, EventSink
from .journal import Journal
from .loader import code_hash, logic_ref
from .storage_api import Storage

log = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    return value


@dataclass
class Receipt:
    """Outcome of `Engine.execute`."""

    ok: bool
    result: Any = None
    events: List[Event] = field(default_factory=list)
    error: Optional[VmError] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "ok": self.ok,
            "result": _json_safe(self.result),
            "events": [ev.to_dict() for ev in self.events],
        }
        if self.error is not None:
            out["error"] = _json_safe(self.error.to_dict())
        return out


class Engine:
    """
    Parameters
    ----------
    logic : module
        Contract logic. Functions take a `CallContext` first.
    address : bytes
        The instance's own address (what `ctx.address` reports).
    storage : Storage, optional
        Committed state. A fresh in-memory store when omitted.
    """

    def __init__(
        self,
        logic: types.ModuleType,
        *,
        address: bytes,
        storage: Optional[Storage] = None,
        config: Optional[LedgerVmConfig] = None,
    ) -> None:
        self._cfg = config or load_config()
        self._logic = logic
        self.address = bytes(address)
        self.storage = storage if storage is not None else Storage(config=self._cfg)
        self._journal = Journal(self.storage)
        self._in_call = False
        self.events: List[Event] = []
        self.last_events: List[Event] = []

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def deploy(
        cls,
        logic: types.ModuleType,
        *,
        address: bytes,
        args: Sequence[Any] = (),
        storage: Optional[Storage] = None,
        config: Optional[LedgerVmConfig] = None,
    ) -> "Engine":
        """Create an engine and run the logic's `initialize(ctx, *args)`."""
        engine = cls(logic, address=address, storage=storage, config=config)
        engine.call("initialize", *args)
        log.info("deployed %s at %s", engine.logic_ref, to_hex(engine.address))
        return engine

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    @property
    def logic(self) -> types.ModuleType:
        return self._logic

    @property
    def logic_ref(self) -> str:
        return logic_ref(self._logic)

    @property
    def config(self) -> LedgerVmConfig:
        return self._cfg

    def abi(self) -> List[str]:
        return list(getattr(self._logic, "__all__", ()))

    def _resolve(self, fn: str):
        if fn not in self.abi():
            raise UnknownFunction(f"function not exported: {fn}", context={"fn": fn})
        target = getattr(self._logic, fn, None)
        if not callable(target):
            raise UnknownFunction(f"export is not callable: {fn}", context={"fn": fn})
        return target

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def call(self, fn: str, *args: Any) -> Any:
        """
        Run `fn` atomically and return its result.

        Any exception leaves committed storage and the event log untouched
        and propagates unchanged to the caller.
        """
        if self._in_call:
            raise ReentrancyError("call re-entered the engine", context={"fn": fn})
        target = self._resolve(fn)

        self._in_call = True
        self._journal.begin()
        sink = EventSink(self._cfg)
        ctx = CallContext(
            address=self.address,
            storage=self._journal,
            events=sink,
            code_hash=code_hash(self._logic),
        )
        try:
            result = target(ctx, *args)
        except BaseException as e:
            self._journal.revert()
            log.info("call %s reverted: %s", fn, e)
            raise
        else:
            self._journal.commit()
            published = list(sink.snapshot())
            self.last_events = published
            self.events.extend(published)
            log.debug("call %s committed (%d events)", fn, len(published))
            return result
        finally:
            self._in_call = False

    def execute(self, fn: str, *args: Any) -> Receipt:
        """Like `call`, but returns a `Receipt` instead of raising `VmError`s."""
        try:
            result = self.call(fn, *args)
        except VmError as e:
            return Receipt(ok=False, error=e)
        return Receipt(ok=True, result=result, events=list(self.last_events))

    def upgrade(self, caller: bytes, new_logic: types.ModuleType) -> Any:
        """
        Point this instance at `new_logic`.

        The current logic's ``upgradeTo`` authorizes the caller and checks
        layout compatibility; the swap only happens once that call commits.
        """
        previous = self.logic_ref
        result = self.call("upgradeTo", caller, getattr(new_logic, "LAYOUT", None), code_hash(new_logic))
        self._logic = new_logic
        log.info("upgraded %s: %s -> %s", to_hex(self.address), previous, self.logic_ref)
        return result


__all__ = ["Engine", "Receipt"]
