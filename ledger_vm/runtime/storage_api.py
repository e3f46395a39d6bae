"""
ledger_vm.runtime.storage_api: instance-bound key/value storage.

Design goals
------------
- Deterministic: pure functions over (key, value) with no wall-clock or I/O.
- Instance-bound: every Engine owns its own `Storage`; there is no
  module-level store a second ledger could observe.
- Pluggable: a tiny backend interface so the host can swap in a real DB.
- Safe: strict byte-length caps; typed helpers for common int/bool use.

Typed helpers
-------------
- get_u256 / set_u256   : 32-byte big-endian unsigned, missing -> 0
- get_bool / set_bool   : b"\\x01" / b"\\x00", missing -> False
- get_bytes / set_bytes : raw bytes, missing -> b""

The typed helpers live on `TypedAccess` so the write journal
(`ledger_vm.runtime.journal.Journal`) exposes exactly the same surface.
"""

from __future__ import annotations

import threading
from typing import Dict, Iterator, Optional, Protocol, Tuple, runtime_checkable

from ledger_vm.config import LedgerVmConfig, load_config
from ledger_vm.errors import StorageError

U256_MAX = (1 << 256) - 1


# ---------------------------- Backend API ---------------------------- #


@runtime_checkable
class StorageBackend(Protocol):
    """Minimal backend interface for contract storage."""

    def get(self, key: bytes) -> Optional[bytes]: ...
    def set(self, key: bytes, value: bytes) -> None: ...
    def delete(self, key: bytes) -> None: ...
    def items(self) -> Iterator[Tuple[bytes, bytes]]: ...


class MemoryBackend:
    """Thread-safe in-memory backend for local runs and tests."""

    def __init__(self, initial: Optional[Dict[bytes, bytes]] = None) -> None:
        self._store: Dict[bytes, bytes] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: bytes) -> Optional[bytes]:
        with self._lock:
            return self._store.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        with self._lock:
            self._store[key] = value

    def delete(self, key: bytes) -> None:
        with self._lock:
            self._store.pop(key, None)

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        with self._lock:
            snapshot = sorted(self._store.items())
        return iter(snapshot)


# ------------------------------ Typed helpers ----------------------------- #


class TypedAccess:
    """
    Typed read/write helpers over raw `get(key)` / `set(key, value)`.

    Subclasses provide `get` and `set`.
    """

    def get(self, key: bytes) -> Optional[bytes]:  # pragma: no cover - abstract
        raise NotImplementedError

    def set(self, key: bytes, value: bytes) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    def get_u256(self, key: bytes) -> int:
        raw = self.get(key)
        return int.from_bytes(raw, "big") if raw else 0

    def set_u256(self, key: bytes, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            raise StorageError("set_u256 value must be int", context={"key": key.hex()})
        if value < 0 or value > U256_MAX:
            raise StorageError("set_u256 out of range (must fit in 256 bits)", context={"key": key.hex()})
        self.set(key, value.to_bytes(32, "big"))

    def get_bool(self, key: bytes) -> bool:
        return self.get(key) == b"\x01"

    def set_bool(self, key: bytes, flag: bool) -> None:
        self.set(key, b"\x01" if flag else b"\x00")

    def get_bytes(self, key: bytes) -> bytes:
        raw = self.get(key)
        return raw if raw else b""

    def set_bytes(self, key: bytes, value: bytes) -> None:
        self.set(key, value)


# ------------------------------- Storage --------------------------------- #


class Storage(TypedAccess):
    """
    Validated committed storage for a single contract instance.
    """

    def __init__(
        self,
        backend: Optional[StorageBackend] = None,
        *,
        config: Optional[LedgerVmConfig] = None,
    ) -> None:
        if backend is not None:
            for attr in ("get", "set", "delete", "items"):
                if not callable(getattr(backend, attr, None)):
                    raise StorageError(f"backend missing method: {attr}")
        self._backend: StorageBackend = backend if backend is not None else MemoryBackend()
        self._cfg = config or load_config()

    @property
    def config(self) -> LedgerVmConfig:
        return self._cfg

    def check_key(self, key: bytes) -> bytes:
        if not isinstance(key, (bytes, bytearray)):
            raise StorageError("storage key must be bytes")
        if len(key) == 0:
            raise StorageError("storage key must be non-empty")
        if len(key) > self._cfg.max_storage_key_bytes:
            raise StorageError(
                f"storage key too long (>{self._cfg.max_storage_key_bytes} bytes)",
                context={"len": len(key)},
            )
        return bytes(key)

    def check_value(self, value: bytes) -> bytes:
        if not isinstance(value, (bytes, bytearray)):
            raise StorageError("storage value must be bytes")
        if len(value) > self._cfg.max_storage_value_bytes:
            raise StorageError(
                f"storage value too large (>{self._cfg.max_storage_value_bytes} bytes)",
                context={"len": len(value)},
            )
        return bytes(value)

    def get(self, key: bytes) -> Optional[bytes]:
        """Return the value for `key`, or None if not set."""
        return self._backend.get(self.check_key(key))

    def set(self, key: bytes, value: bytes) -> None:
        """Set `key` to `value` (overwrites existing)."""
        self._backend.set(self.check_key(key), self.check_value(value))

    def delete(self, key: bytes) -> None:
        self._backend.delete(self.check_key(key))

    def items(self) -> Iterator[Tuple[bytes, bytes]]:
        """Iterate committed (key, value) pairs in key order."""
        return self._backend.items()

    def to_dict(self) -> Dict[bytes, bytes]:
        return dict(self.items())


__all__ = [
    "U256_MAX",
    "StorageBackend",
    "MemoryBackend",
    "TypedAccess",
    "Storage",
]
