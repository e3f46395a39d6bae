"""
ledger_vm.runtime.context: the explicit per-call environment.

Contract functions receive a `CallContext` as their first argument instead
of reaching for ambient globals:

    def transfer(ctx: CallContext, caller: bytes, to: bytes, amount: int) -> bool:
        bal = ctx.storage.get_u256(key_balance(caller))
        ...
        ctx.events.emit(b"Transfer", {"from": caller, "to": to, "value": amount})

The caller identity is never stored here; it is threaded through every
mutating function's signature.

Address helpers accept raw bytes or hex strings (with or without "0x").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .events_api import EventSink
from .journal import Journal


class ContextError(ValueError):
    """Validation or coercion failure for addresses and hex payloads."""


def _strip_0x(s: str) -> str:
    return s[2:] if s.startswith(("0x", "0X")) else s


def to_bytes(value: Union[bytes, bytearray, memoryview, str]) -> bytes:
    """
    Coerce `value` to bytes.
    - If str, interpret as hex (with or without '0x'); odd-length hex is rejected.
    - If a bytes-like object, copy to immutable bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        h = _strip_0x(value.strip())
        if len(h) % 2 != 0:
            raise ContextError(f"hex string must have even length, got {len(h)}")
        try:
            return bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex string: {value!r}") from e
    raise ContextError(f"cannot convert type {type(value).__name__} to bytes")


def to_hex(b: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


@dataclass(frozen=True)
class CallContext:
    """
    Fields
    ------
    address: the contract instance's own address.
    storage: the write journal for this call (typed helpers included).
    events:  the call-local event sink.
    code_hash: SHA3-256 of the running logic source (implementation id).
    """

    address: bytes
    storage: Journal
    events: EventSink
    code_hash: bytes = b""


__all__ = [
    "ContextError",
    "to_bytes",
    "to_hex",
    "CallContext",
]
