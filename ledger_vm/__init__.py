"""
ledger_vm: deterministic single-instance execution host for Python contracts.

Small façade over the runtime:

- Engine(logic, *, address, storage=None, config=None)
    Bind a logic module to an address and instance-owned storage; every
    `call(fn, *args)` is atomic (all writes and events, or none).
- Engine.deploy(logic, *, address, args)
    Construct and run `initialize`.
- load_logic(ref)
    Import a logic module from a dotted path or a .py file.
- Revert / VmError
    Failure types; contract errors subclass `Revert`.
"""

from __future__ import annotations

from .errors import Revert, VmError
from .runtime.engine import Engine, Receipt
from .runtime.loader import load_logic
from .version import __version__


def version() -> str:
    """Return the ledger_vm version string."""
    return __version__


__all__ = [
    "__version__",
    "version",
    "Engine",
    "Receipt",
    "Revert",
    "VmError",
    "load_logic",
]
