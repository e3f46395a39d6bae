# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.upgrade
==============================

Helpers for contracts whose logic can be swapped in place while their
storage stays put.

This module stores the implementation identifier and the storage layout the
instance is running under, checks layout compatibility on upgrade, and
emits a consistent upgrade event. It **does not** perform authorization.
Callers MUST enforce policy (e.g. `require_owner`) before invoking
`upgrade_to`.

Design notes
------------
- Implementation identifier: ``b"upg:impl"``, the SHA3-256 of the logic
  source (what the engine reports as `ctx.code_hash`).
- Layout: ``b"upg:layout"``, the canonical CBOR of the current
  `StorageLayout`.
- Event: ``b"Upgraded" {previous, implementation, layoutVersion}``.

Typical usage
-------------
    from token_contracts.stdlib.access.ownable import require_owner
    from token_contracts.stdlib.upgrade import upgrade_to

    def upgradeTo(ctx, caller: bytes, layout, impl: bytes) -> None:
        require_owner(ctx, caller)
        upgrade_to(ctx, layout, impl)
"""

from __future__ import annotations

from typing import Final, Optional

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..errors import IncompatibleLayout
from .layout import Field, StorageLayout, check_compatible

IMPL_KEY: Final[bytes] = b"upg:impl"
LAYOUT_KEY: Final[bytes] = b"upg:layout"

EVT_UPGRADED: Final[bytes] = b"Upgraded"

ERR_EMPTY: Final[bytes] = b"UPG:EMPTY"
ERR_SAME: Final[bytes] = b"UPG:SAME"


def implementation(ctx: CallContext) -> bytes:
    """Current implementation identifier; empty bytes if unset."""
    return ctx.storage.get_bytes(IMPL_KEY)


def stored_layout(ctx: CallContext) -> Optional[StorageLayout]:
    raw = ctx.storage.get_bytes(LAYOUT_KEY)
    return StorageLayout.decode(raw) if raw else None


def _write(ctx: CallContext, layout: StorageLayout, impl: bytes) -> None:
    abi.require(bool(impl), ERR_EMPTY)
    ctx.storage.set_bytes(IMPL_KEY, bytes(impl))
    ctx.storage.set_bytes(LAYOUT_KEY, layout.encode())


def record_deployment(ctx: CallContext, layout: StorageLayout, impl: bytes) -> None:
    """Record the first implementation and layout (initializers only)."""
    _write(ctx, layout, impl)


def upgrade_to(ctx: CallContext, new_layout: StorageLayout, new_impl: bytes) -> None:
    """
    Point the instance at `new_impl`.

    Reverts
    -------
    IncompatibleLayout  if `new_layout` does not only append to the stored layout
    b"UPG:EMPTY"        if `new_impl` is empty
    b"UPG:SAME"         if `new_impl` is already current
    """
    if not isinstance(new_layout, StorageLayout):
        abi.revert("UPGRADE: missing storage layout", error=IncompatibleLayout)
    previous = implementation(ctx)
    abi.require(bytes(new_impl) != previous, ERR_SAME)

    current = stored_layout(ctx)
    if current is not None:
        check_compatible(current, new_layout)

    _write(ctx, new_layout, new_impl)
    ctx.events.emit(
        EVT_UPGRADED,
        {"previous": previous, "implementation": bytes(new_impl), "layoutVersion": new_layout.version},
    )


__all__ = [
    "IMPL_KEY",
    "LAYOUT_KEY",
    "EVT_UPGRADED",
    "Field",
    "StorageLayout",
    "check_compatible",
    "implementation",
    "stored_layout",
    "record_deployment",
    "upgrade_to",
]
