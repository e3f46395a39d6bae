"""
ledger_vm.runtime: host side of contract execution.

Submodules
----------
- storage_api : instance-bound validated key/value storage
- journal     : checkpointed write overlay (atomic calls)
- events_api  : validated call-local event sink
- context     : CallContext handed to every contract function
- abi         : revert / require helpers for contract code
- engine      : Engine (atomic call, execute, upgrade) and Receipt
- loader      : logic module resolution and code hashes
- snapshot    : CBOR state persistence
"""

from __future__ import annotations

from .context import CallContext
from .engine import Engine, Receipt
from .events_api import Event, EventSink
from .journal import Journal
from .loader import code_hash, load_logic
from .storage_api import MemoryBackend, Storage

__all__ = [
    "CallContext",
    "Engine",
    "Receipt",
    "Event",
    "EventSink",
    "Journal",
    "MemoryBackend",
    "Storage",
    "code_hash",
    "load_logic",
]
