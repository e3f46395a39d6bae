"""
ledger_vm.runtime.journal: journaling writes, checkpoints, revert/commit.

A deterministic, in-memory write journal layered over a `Storage`. It
supports nested checkpoints via a stack of overlays. Writes go to the top
overlay; reads consult overlays from top → base. `commit()` merges the top
overlay into the next layer (or the base storage if it is the last layer).
`revert()` discards the top overlay.

Key properties
--------------
- Nothing reaches the base storage until the outermost checkpoint commits,
  so a failed call leaves committed state exactly as it was.
- Storage overlay per key with explicit deletion markers (`None`).
- Reads always see the latest staged value; there is no read cache that
  could go stale between a check and the write it gates.

Intended usage
--------------
    j = Journal(storage)
    j.begin()
    j.set_u256(b"tok:meta:total", 10)
    j.commit()          # applied to `storage`
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ledger_vm.errors import StorageError

from .storage_api import Storage, TypedAccess

_Overlay = Dict[bytes, Optional[bytes]]


class Journal(TypedAccess):
    """
    A copy-on-write write journal with nested checkpoints.

    Parameters
    ----------
    storage : Storage
        The committed base storage. Key/value validation is delegated to it.
    """

    def __init__(self, storage: Storage) -> None:
        self._base = storage
        self._layers: List[_Overlay] = []

    @property
    def base(self) -> Storage:
        return self._base

    # ------------------------------------------------------------------ #
    # Checkpointing
    # ------------------------------------------------------------------ #

    def depth(self) -> int:
        """Number of open overlays (0 when idle)."""
        return len(self._layers)

    def begin(self) -> int:
        """Open a new checkpoint. Returns the new depth."""
        self._layers.append({})
        return len(self._layers)

    def commit(self) -> None:
        """Merge the top overlay into its parent, or into the base storage."""
        if not self._layers:
            raise StorageError("commit without an open checkpoint")
        top = self._layers.pop()
        if self._layers:
            self._layers[-1].update(top)
            return
        for key, value in top.items():
            if value is None:
                self._base.delete(key)
            else:
                self._base.set(key, value)

    def revert(self) -> None:
        """Discard every staged write in the top overlay."""
        if not self._layers:
            raise StorageError("revert without an open checkpoint")
        self._layers.pop()

    # ------------------------------------------------------------------ #
    # Key/value access
    # ------------------------------------------------------------------ #

    def get(self, key: bytes) -> Optional[bytes]:
        k = self._base.check_key(key)
        for layer in reversed(self._layers):
            if k in layer:
                return layer[k]
        return self._base.get(k)

    def set(self, key: bytes, value: bytes) -> None:
        if not self._layers:
            raise StorageError("storage write outside of a call")
        self._layers[-1][self._base.check_key(key)] = self._base.check_value(value)

    def delete(self, key: bytes) -> None:
        if not self._layers:
            raise StorageError("storage write outside of a call")
        self._layers[-1][self._base.check_key(key)] = None


__all__ = ["Journal"]
