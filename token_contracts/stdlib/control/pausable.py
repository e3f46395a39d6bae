# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.control.pausable
=======================================

Global pause switch.

Key Points
----------
- The paused flag is **global to the contract** (single boolean).
- Changing pause state requires the owner (`access.ownable`).
- Pause and unpause are idempotent and emit no events; the state is read
  through `is_paused`, not broadcast.
- Only the value-moving paths consult `require_not_paused`. Approvals,
  burns and administrative calls keep working while paused.

Public API
----------
- ``is_paused(ctx) -> bool``
- ``require_not_paused(ctx) -> None``: revert with `OperationPaused` if paused
- ``set_paused(ctx, flag) -> None``: unchecked write (initializers)
- ``pause(ctx, caller) -> None`` / ``unpause(ctx, caller) -> None``: owner-only
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..access.ownable import require_owner
from ..errors import OperationPaused

PAUSED_KEY: Final[bytes] = b"control:paused"


def is_paused(ctx: CallContext) -> bool:
    return ctx.storage.get_bool(PAUSED_KEY)


def require_not_paused(ctx: CallContext) -> None:
    if is_paused(ctx):
        abi.revert(error=OperationPaused)


def set_paused(ctx: CallContext, flag: bool) -> None:
    ctx.storage.set_bool(PAUSED_KEY, bool(flag))


def pause(ctx: CallContext, caller: bytes) -> None:
    require_owner(ctx, caller)
    set_paused(ctx, True)


def unpause(ctx: CallContext, caller: bytes) -> None:
    require_owner(ctx, caller)
    set_paused(ctx, False)


__all__ = [
    "PAUSED_KEY",
    "is_paused",
    "require_not_paused",
    "set_paused",
    "pause",
    "unpause",
]
