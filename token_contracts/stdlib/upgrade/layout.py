# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.upgrade.layout
=====================================

Versioned, append-only description of a contract's persisted state.

A `StorageLayout` lists every persisted field in declaration order. New logic
may only *append* fields; an existing field keeps its position, storage key
and kind forever. `check_compatible` enforces that rule when logic is
swapped, so new code always reads old data with its original meaning.

    V1 = StorageLayout(1, (Field("balances", b"tok:bal:", "map:u256"), ...))
    V2 = V1.extend(2, Field("fee_bps", b"fee:bps", "u256"))
    check_compatible(V1, V2)        # ok
    check_compatible(V2, V1)        # IncompatibleLayout

Layouts are stored on-chain as canonical CBOR (`encode`/`decode`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Tuple

import cbor2

from ledger_vm.runtime import abi

from ..errors import IncompatibleLayout

KINDS: Final[Tuple[str, ...]] = ("u256", "bool", "bytes", "map:u256", "map:bool")


@dataclass(frozen=True)
class Field:
    name: str
    key: bytes
    kind: str

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"unknown field kind: {self.kind!r}")
        if not self.name or not self.key:
            raise ValueError("field name and key must be non-empty")


@dataclass(frozen=True)
class StorageLayout:
    version: int
    fields: Tuple[Field, ...]

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        keys = [f.key for f in self.fields]
        if len(set(names)) != len(names) or len(set(keys)) != len(keys):
            raise ValueError("duplicate field name or key in layout")

    def extend(self, version: int, *fields: Field) -> "StorageLayout":
        """Return a newer layout with `fields` appended."""
        return StorageLayout(version, self.fields + tuple(fields))

    def encode(self) -> bytes:
        doc = {
            "version": self.version,
            "fields": [[f.name, f.key, f.kind] for f in self.fields],
        }
        return cbor2.dumps(doc, canonical=True)

    @classmethod
    def decode(cls, blob: bytes) -> "StorageLayout":
        doc = cbor2.loads(blob)
        fields = tuple(Field(str(n), bytes(k), str(kind)) for n, k, kind in doc["fields"])
        return cls(int(doc["version"]), fields)


def check_compatible(old: StorageLayout, new: StorageLayout) -> None:
    """Revert with `IncompatibleLayout` unless `new` only appends to `old`."""
    if new.version < old.version:
        abi.revert(
            f"UPGRADE: layout version {new.version} is older than {old.version}",
            error=IncompatibleLayout,
            context={"old": old.version, "new": new.version},
        )
    for i, was in enumerate(old.fields):
        if i >= len(new.fields):
            abi.revert(
                f"UPGRADE: field '{was.name}' was removed",
                error=IncompatibleLayout,
                context={"field": was.name},
            )
        now = new.fields[i]
        if now != was:
            abi.revert(
                f"UPGRADE: field '{was.name}' changed or moved",
                error=IncompatibleLayout,
                context={"field": was.name, "position": i},
            )


__all__ = ["KINDS", "Field", "StorageLayout", "check_compatible"]
