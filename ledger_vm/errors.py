"""
ledger_vm.errors: error types shared by the host runtime and contract code.

Hierarchy
---------
VmError (base)
 ├─ Revert            : contract-triggered failure (carries a verbatim reason)
 ├─ ReentrancyError   : a call entered the engine while another was in flight
 ├─ StorageError      : bad key/value, cap exceeded, write outside a call
 ├─ EventError        : malformed event name/args, cap exceeded
 └─ UnknownFunction   : name not exported by the logic's ABI (`__all__`)

Contract libraries subclass `Revert` and pin a stable `code` on the class so
callers and tests can assert on the precise cause, not merely "it failed":

    class InsufficientBalance(Revert):
        code = "InsufficientBalance"
        default_reason = "ERC20: transfer amount exceeds balance"
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class VmError(Exception):
    """
    Structured error used by the runtime.

    Attributes:
        code: short machine-readable code string
        message: human-readable message
        context: optional extra fields for debugging / CLI output
    """

    code: str = "vm_error"

    def __init__(
        self,
        message: str = "",
        *,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = str(code)
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.context:
            out["context"] = dict(self.context)
        return out


class Revert(VmError):
    """
    Contract-triggered revert.

    The reason string is surfaced verbatim. Bytes reasons (the style used by
    `abi.revert(b"...")`) are decoded as UTF-8.
    """

    code = "REVERT"
    default_reason = "reverted"

    def __init__(
        self,
        reason: Optional[str | bytes] = None,
        *,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        if isinstance(reason, (bytes, bytearray)):
            reason = bytes(reason).decode("utf-8", errors="replace")
        super().__init__(reason or self.default_reason, context=context)

    @property
    def reason(self) -> str:
        return self.message


class ReentrancyError(VmError):
    code = "REENTRANCY"


class StorageError(VmError):
    code = "STORAGE"


class EventError(VmError):
    code = "EVENT_INVALID"


class UnknownFunction(VmError):
    code = "UNKNOWN_FUNCTION"


__all__ = [
    "VmError",
    "Revert",
    "ReentrancyError",
    "StorageError",
    "EventError",
    "UnknownFunction",
]
