# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.upgrade.initializable
============================================

One-shot and versioned initialization guards.

- `initializer(ctx)`: only while nothing has been initialized yet
  (version 0 -> 1). A second call reverts with `ReinitializationBlocked`.
- `reinitializer(ctx, version)`: for upgraded logic that needs its own setup
  step; only runs when `version` is greater than the stored one.

Both emit ``Initialized {"version": int}``.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..errors import ReinitializationBlocked

INIT_VERSION_KEY: Final[bytes] = b"init:version"

EVT_INITIALIZED: Final[bytes] = b"Initialized"


def get_initialized_version(ctx: CallContext) -> int:
    return ctx.storage.get_u256(INIT_VERSION_KEY)


def reinitializer(ctx: CallContext, version: int) -> None:
    if version <= get_initialized_version(ctx):
        abi.revert(error=ReinitializationBlocked, context={"version": version})
    ctx.storage.set_u256(INIT_VERSION_KEY, version)
    ctx.events.emit(EVT_INITIALIZED, {"version": version})


def initializer(ctx: CallContext) -> None:
    if get_initialized_version(ctx) != 0:
        abi.revert(error=ReinitializationBlocked)
    reinitializer(ctx, 1)


__all__ = [
    "INIT_VERSION_KEY",
    "EVT_INITIALIZED",
    "get_initialized_version",
    "initializer",
    "reinitializer",
]
