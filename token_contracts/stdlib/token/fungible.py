# -*- coding: utf-8 -*-
"""
ERC-20 style fungible ledger
============================

Deterministic, float-free, storage-backed balance/allowance bookkeeping. Every
function takes the `CallContext` first and, when it mutates, the explicit
`caller` next (no ambient msg.sender).

Highlights
----------
- Storage layout from `token_contracts.stdlib.token` (prefixed keys).
- Events through `ctx.events`:
    - b"Transfer" { "from": bytes, "to": bytes, "value": int }
    - b"Approval" { "owner": bytes, "spender": bytes, "value": int }
- U256-checked math via `token_contracts.stdlib.math.safe_uint`.
- A before-transfer `hook(ctx, src, dst, amount)` lets the composing contract
  layer policy (pause, anti-bot) onto `transfer`/`transfer_from`. It runs after
  address validation and before any balance is read or written. Burns do not
  go through the hook.

Public interface (ABI sketch)
-----------------------------
# views
name(ctx) -> str
symbol(ctx) -> str
decimals(ctx) -> int
total_supply(ctx) -> int
balance_of(ctx, addr) -> int
allowance(ctx, owner, spender) -> int

# setup (composing contract's initializer only)
init_metadata(ctx, name, symbol, decimals) -> None
mint_initial(ctx, to, amount) -> None

# state-changing (explicit caller)
transfer(ctx, caller, to, amount, *, hook=None) -> bool
approve(ctx, caller, spender, amount) -> bool
transfer_from(ctx, caller, owner, to, amount, *, hook=None) -> bool
increase_allowance(ctx, caller, spender, added) -> bool
decrease_allowance(ctx, caller, spender, subtracted) -> bool
burn(ctx, caller, amount) -> bool
burn_from(ctx, caller, owner, amount) -> bool
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..errors import (InsufficientAllowance, InsufficientBalance,
                      InvalidAddress, InvalidRecipient)
from ..math.safe_uint import u256_add, u256_sub
from . import (EVT_APPROVAL, EVT_TRANSFER, K_DECIMALS, K_NAME, K_SYMBOL,
               K_TOTAL, REASON_APPROVE_FROM_ZERO, REASON_APPROVE_TO_ZERO,
               REASON_BURN_EXCEEDS, REASON_BURN_FROM_ZERO,
               REASON_DECREASED_BELOW_ZERO, REASON_INSUFFICIENT_ALLOWANCE,
               REASON_TRANSFER_EXCEEDS, REASON_TRANSFER_FROM_ZERO,
               REASON_TRANSFER_TO_ZERO, ZERO_ADDRESS, as_metadata,
               is_zero_address, key_allow, key_balance, require_address,
               require_amount)

TransferHook = Callable[[CallContext, bytes, bytes, int], None]

# ------------------------------------------------------------------------------
# Views
# ------------------------------------------------------------------------------


def name(ctx: CallContext) -> str:
    return ctx.storage.get_bytes(K_NAME).decode("utf-8")


def symbol(ctx: CallContext) -> str:
    return ctx.storage.get_bytes(K_SYMBOL).decode("utf-8")


def decimals(ctx: CallContext) -> int:
    return ctx.storage.get_u256(K_DECIMALS)


def total_supply(ctx: CallContext) -> int:
    return ctx.storage.get_u256(K_TOTAL)


def balance_of(ctx: CallContext, addr: bytes) -> int:
    return ctx.storage.get_u256(key_balance(addr))


def allowance(ctx: CallContext, owner: bytes, spender: bytes) -> int:
    return ctx.storage.get_u256(key_allow(owner, spender))


# ------------------------------------------------------------------------------
# Setup
# ------------------------------------------------------------------------------


def init_metadata(ctx: CallContext, name: Union[str, bytes], symbol: Union[str, bytes], decimals: int) -> None:
    """Store name, symbol and decimals exactly as given."""
    nm = as_metadata(name)
    sym = as_metadata(symbol)
    require_amount(decimals)

    ctx.storage.set_bytes(K_NAME, nm)
    ctx.storage.set_bytes(K_SYMBOL, sym)
    ctx.storage.set_u256(K_DECIMALS, decimals)


def mint_initial(ctx: CallContext, to: bytes, amount: int) -> None:
    """
    Credit `amount` to `to` and grow total supply. Only the composing
    contract's initializer calls this; there is no public mint.
    """
    require_address(to)
    abi.require(not is_zero_address(to), "ERC20: mint to the zero address", error=InvalidRecipient)
    require_amount(amount)

    ctx.storage.set_u256(K_TOTAL, u256_add(total_supply(ctx), amount))
    to_key = key_balance(to)
    ctx.storage.set_u256(to_key, u256_add(ctx.storage.get_u256(to_key), amount))
    ctx.events.emit(EVT_TRANSFER, {"from": ZERO_ADDRESS, "to": to, "value": amount})


# ------------------------------------------------------------------------------
# Mutations (explicit caller)
# ------------------------------------------------------------------------------


def _check_transfer_parties(src: bytes, dst: bytes) -> None:
    require_address(src)
    require_address(dst)
    if is_zero_address(src):
        abi.revert(REASON_TRANSFER_FROM_ZERO, error=InvalidAddress)
    if is_zero_address(dst):
        abi.revert(REASON_TRANSFER_TO_ZERO, error=InvalidRecipient)


def _move(ctx: CallContext, src: bytes, dst: bytes, amount: int, hook: Optional[TransferHook]) -> None:
    """
    The single transfer primitive: policy hook, balance check, then mutate.
    Balances are read at the moment of the move; nothing is cached across
    the hook.
    """
    if hook is not None:
        hook(ctx, src, dst, amount)

    src_key = key_balance(src)
    src_bal = ctx.storage.get_u256(src_key)
    if src_bal < amount:
        abi.revert(REASON_TRANSFER_EXCEEDS, error=InsufficientBalance)
    ctx.storage.set_u256(src_key, u256_sub(src_bal, amount))

    # Read after the debit so a self-transfer nets to zero.
    dst_key = key_balance(dst)
    ctx.storage.set_u256(dst_key, u256_add(ctx.storage.get_u256(dst_key), amount))

    ctx.events.emit(EVT_TRANSFER, {"from": src, "to": dst, "value": amount})


def transfer(
    ctx: CallContext,
    caller: bytes,
    to: bytes,
    amount: int,
    *,
    hook: Optional[TransferHook] = None,
) -> bool:
    _check_transfer_parties(caller, to)
    require_amount(amount)
    _move(ctx, caller, to, amount, hook)
    return True


def approve(ctx: CallContext, caller: bytes, spender: bytes, amount: int) -> bool:
    """Set (not add to) the allowance of `spender` over `caller`'s tokens."""
    require_address(caller)
    require_address(spender)
    if is_zero_address(caller):
        abi.revert(REASON_APPROVE_FROM_ZERO, error=InvalidAddress)
    if is_zero_address(spender):
        abi.revert(REASON_APPROVE_TO_ZERO, error=InvalidRecipient)
    require_amount(amount)

    ctx.storage.set_u256(key_allow(caller, spender), amount)
    ctx.events.emit(EVT_APPROVAL, {"owner": caller, "spender": spender, "value": amount})
    return True


def _spend_allowance(ctx: CallContext, owner: bytes, spender: bytes, amount: int) -> None:
    allow_key = key_allow(owner, spender)
    current = ctx.storage.get_u256(allow_key)
    if current < amount:
        abi.revert(REASON_INSUFFICIENT_ALLOWANCE, error=InsufficientAllowance)
    ctx.storage.set_u256(allow_key, u256_sub(current, amount))


def transfer_from(
    ctx: CallContext,
    caller: bytes,
    owner: bytes,
    to: bytes,
    amount: int,
    *,
    hook: Optional[TransferHook] = None,
) -> bool:
    """
    Spender (`caller`) moves `amount` from `owner` to `to` using allowance.
    """
    require_address(caller)
    _check_transfer_parties(owner, to)
    require_amount(amount)

    _spend_allowance(ctx, owner, caller, amount)
    _move(ctx, owner, to, amount, hook)
    return True


def increase_allowance(ctx: CallContext, caller: bytes, spender: bytes, added: int) -> bool:
    require_amount(added)
    current = allowance(ctx, caller, spender)
    return approve(ctx, caller, spender, u256_add(current, added))


def decrease_allowance(ctx: CallContext, caller: bytes, spender: bytes, subtracted: int) -> bool:
    require_amount(subtracted)
    current = allowance(ctx, caller, spender)
    if current < subtracted:
        abi.revert(REASON_DECREASED_BELOW_ZERO, error=InsufficientAllowance)
    return approve(ctx, caller, spender, u256_sub(current, subtracted))


def _burn(ctx: CallContext, holder: bytes, amount: int) -> None:
    bal_key = key_balance(holder)
    cur = ctx.storage.get_u256(bal_key)
    if cur < amount:
        abi.revert(REASON_BURN_EXCEEDS, error=InsufficientBalance)

    ctx.storage.set_u256(bal_key, u256_sub(cur, amount))
    ctx.storage.set_u256(K_TOTAL, u256_sub(total_supply(ctx), amount))
    ctx.events.emit(EVT_TRANSFER, {"from": holder, "to": ZERO_ADDRESS, "value": amount})


def burn(ctx: CallContext, caller: bytes, amount: int) -> bool:
    """
    Holder burns their own tokens.
    """
    require_address(caller)
    if is_zero_address(caller):
        abi.revert(REASON_BURN_FROM_ZERO, error=InvalidAddress)
    require_amount(amount)
    _burn(ctx, caller, amount)
    return True


def burn_from(ctx: CallContext, caller: bytes, owner: bytes, amount: int) -> bool:
    """
    Spender burns tokens from `owner` using allowance.
    """
    require_address(caller)
    require_address(owner)
    if is_zero_address(owner):
        abi.revert(REASON_BURN_FROM_ZERO, error=InvalidAddress)
    require_amount(amount)

    _spend_allowance(ctx, owner, caller, amount)
    _burn(ctx, owner, amount)
    return True


__all__ = [
    "TransferHook",
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "init_metadata",
    "mint_initial",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
    "burn",
    "burn_from",
]
