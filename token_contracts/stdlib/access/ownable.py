# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.access.ownable
=====================================

Minimal, deterministic **Ownable** helper.

- read the current owner (`get_owner`)
- set the owner once at initialization (`init_owner`)
- check that a caller is the owner (`require_owner`)
- hand ownership to a new account (`transfer_ownership`)
- renounce ownership for good (`renounce_ownership`)

Conventions
-----------
- The owner is stored at ``OWNER_KEY = b"access:owner"``.
- Ownership transfer is a direct assignment; there is no accept step.
- A renounced contract stores the null address. The null address never
  passes `require_owner`, so renouncing is irreversible.
- Events:
    - "OwnershipTransferred" args: {"previousOwner": bytes, "newOwner": bytes}

Typical usage
-------------
    from token_contracts.stdlib.access.ownable import require_owner

    def setTransactionLimit(ctx, caller: bytes, amount: int) -> None:
        require_owner(ctx, caller)
        ...
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..errors import InvalidRecipient, Unauthorized
from ..token import ZERO_ADDRESS, is_zero_address, require_address

OWNER_KEY: Final[bytes] = b"access:owner"

EVT_OWNERSHIP_TRANSFERRED: Final[bytes] = b"OwnershipTransferred"

REASON_NOT_OWNER: Final[str] = "Ownable: caller is not the owner"
REASON_NEW_OWNER_ZERO: Final[str] = "Ownable: new owner is the zero address"


# --- Owner primitives ---------------------------------------------------------


def get_owner(ctx: CallContext) -> bytes:
    """
    Return the current owner address (the null address when unset or renounced).
    """
    v = ctx.storage.get_bytes(OWNER_KEY)
    return v if v else ZERO_ADDRESS


def _set_owner(ctx: CallContext, new_owner: bytes) -> None:
    previous = get_owner(ctx)
    ctx.storage.set_bytes(OWNER_KEY, bytes(new_owner))
    ctx.events.emit(EVT_OWNERSHIP_TRANSFERRED, {"previousOwner": previous, "newOwner": bytes(new_owner)})


def init_owner(ctx: CallContext, owner: bytes) -> None:
    """
    Set the first owner. Emits OwnershipTransferred(null, owner).
    """
    require_address(owner)
    if is_zero_address(owner):
        abi.revert(REASON_NEW_OWNER_ZERO, error=InvalidRecipient)
    _set_owner(ctx, owner)


def require_owner(ctx: CallContext, caller: bytes) -> None:
    """
    Revert with `Unauthorized` unless `caller` equals the current owner.
    """
    owner = get_owner(ctx)
    if is_zero_address(owner) or owner != caller:
        abi.revert(REASON_NOT_OWNER, error=Unauthorized)


def transfer_ownership(ctx: CallContext, caller: bytes, new_owner: bytes) -> None:
    """
    Owner-only: transfer ownership to `new_owner` (must not be null).
    """
    require_owner(ctx, caller)
    require_address(new_owner)
    if is_zero_address(new_owner):
        abi.revert(REASON_NEW_OWNER_ZERO, error=InvalidRecipient)
    _set_owner(ctx, new_owner)


def renounce_ownership(ctx: CallContext, caller: bytes) -> None:
    """
    Owner-only: set the owner to the null address. Every later owner check fails.
    """
    require_owner(ctx, caller)
    _set_owner(ctx, ZERO_ADDRESS)


__all__ = [
    "OWNER_KEY",
    "EVT_OWNERSHIP_TRANSFERRED",
    "REASON_NOT_OWNER",
    "REASON_NEW_OWNER_ZERO",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
    "renounce_ownership",
]
