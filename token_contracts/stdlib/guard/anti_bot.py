# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.guard.anti_bot
=====================================

Owner-tunable transfer guard: a whitelist gate plus per-transfer and
per-wallet ceilings, all switched on and off by one flag.

Storage
-------
- ``guard:enabled``       bool, master switch
- ``guard:tx_limit``      u256, max amount per transfer
- ``guard:wallet_limit``  u256, max recipient balance after a transfer
- ``guard:wl:`` || addr   bool, whitelist membership

Evaluation (`check_transfer`, run before every balance-moving transfer)
-----------------------------------------------------------------------
1. Guard disabled                       -> allow.
2. Neither party whitelisted            -> TransactionsDisabled (any amount, 0 included).
3. amount > tx_limit                    -> TransactionLimitExceeded.
4. balance_of(to) + amount > wallet_lim -> WalletBalanceLimitExceeded.
5. Otherwise allow.

Limits are strict upper bounds (equal passes). Whitelisting either party
opens the gate in step 2 only; the ceilings in steps 3-4 apply to every
transfer once the gate is passed. The recipient balance is read live from
the ledger at evaluation time.

Events
------
- AntiBotProtectionUpdated      {"enabled": bool}
- WhiteListUpdated              {"added": bool, "addresses": [bytes, ...]}

One whitelist update lists every address it was given in a single event,
so a batch is bounded by LEDGER_VM_MAX_EVENT_LIST_ITEMS (default 100000);
larger batches revert with EventError and must be split.
- MaximumTransactionLimitUpdated {"amount": int}
- MaximumWalletBalanceUpdated   {"amount": int}
"""

from __future__ import annotations

from typing import Final, Iterable, Tuple

from ledger_vm.runtime import abi
from ledger_vm.runtime.context import CallContext

from ..access.ownable import require_owner
from ..errors import (TransactionLimitExceeded, TransactionsDisabled,
                      WalletBalanceLimitExceeded)
from ..token import require_address, require_amount
from ..token.fungible import balance_of

ENABLED_KEY: Final[bytes] = b"guard:enabled"
TX_LIMIT_KEY: Final[bytes] = b"guard:tx_limit"
WALLET_LIMIT_KEY: Final[bytes] = b"guard:wallet_limit"
WL_PREFIX: Final[bytes] = b"guard:wl:"

EVT_ANTI_BOT_UPDATED: Final[bytes] = b"AntiBotProtectionUpdated"
EVT_WHITELIST_UPDATED: Final[bytes] = b"WhiteListUpdated"
EVT_TX_LIMIT_UPDATED: Final[bytes] = b"MaximumTransactionLimitUpdated"
EVT_WALLET_LIMIT_UPDATED: Final[bytes] = b"MaximumWalletBalanceUpdated"


def key_whitelist(addr: bytes) -> bytes:
    require_address(addr)
    return WL_PREFIX + bytes(addr)


# --- Queries ------------------------------------------------------------------


def is_enabled(ctx: CallContext) -> bool:
    return ctx.storage.get_bool(ENABLED_KEY)


def is_whitelisted(ctx: CallContext, addr: bytes) -> bool:
    return ctx.storage.get_bool(key_whitelist(addr))


def transaction_limit(ctx: CallContext) -> int:
    return ctx.storage.get_u256(TX_LIMIT_KEY)


def wallet_balance_limit(ctx: CallContext) -> int:
    return ctx.storage.get_u256(WALLET_LIMIT_KEY)


# --- Setup --------------------------------------------------------------------


def _set_members(ctx: CallContext, addresses: Iterable[bytes], flag: bool) -> Tuple[bytes, ...]:
    members = tuple(addresses)
    for addr in members:
        ctx.storage.set_bool(key_whitelist(addr), flag)
    return tuple(bytes(a) for a in members)


def init_guard(
    ctx: CallContext,
    *,
    enabled: bool,
    tx_limit: int,
    wallet_limit: int,
    whitelist: Iterable[bytes] = (),
) -> None:
    """Write the initial guard configuration (no owner check, no events)."""
    require_amount(tx_limit)
    require_amount(wallet_limit)
    ctx.storage.set_bool(ENABLED_KEY, bool(enabled))
    ctx.storage.set_u256(TX_LIMIT_KEY, tx_limit)
    ctx.storage.set_u256(WALLET_LIMIT_KEY, wallet_limit)
    _set_members(ctx, whitelist, True)


# --- Owner-only setters -------------------------------------------------------


def set_enabled(ctx: CallContext, caller: bytes, enabled: bool) -> None:
    require_owner(ctx, caller)
    ctx.storage.set_bool(ENABLED_KEY, bool(enabled))
    ctx.events.emit(EVT_ANTI_BOT_UPDATED, {"enabled": bool(enabled)})


def add_to_whitelist(ctx: CallContext, caller: bytes, addresses: Iterable[bytes]) -> None:
    """Bulk add; already-present addresses are left as they are."""
    require_owner(ctx, caller)
    members = _set_members(ctx, addresses, True)
    ctx.events.emit(EVT_WHITELIST_UPDATED, {"added": True, "addresses": members})


def remove_from_whitelist(ctx: CallContext, caller: bytes, addresses: Iterable[bytes]) -> None:
    require_owner(ctx, caller)
    members = _set_members(ctx, addresses, False)
    ctx.events.emit(EVT_WHITELIST_UPDATED, {"added": False, "addresses": members})


def set_transaction_limit(ctx: CallContext, caller: bytes, amount: int) -> None:
    require_owner(ctx, caller)
    require_amount(amount)
    ctx.storage.set_u256(TX_LIMIT_KEY, amount)
    ctx.events.emit(EVT_TX_LIMIT_UPDATED, {"amount": amount})


def set_wallet_balance_limit(ctx: CallContext, caller: bytes, amount: int) -> None:
    require_owner(ctx, caller)
    require_amount(amount)
    ctx.storage.set_u256(WALLET_LIMIT_KEY, amount)
    ctx.events.emit(EVT_WALLET_LIMIT_UPDATED, {"amount": amount})


# --- Evaluation ---------------------------------------------------------------


def check_transfer(ctx: CallContext, src: bytes, dst: bytes, amount: int) -> None:
    """Revert unless the guard admits moving `amount` from `src` to `dst`."""
    if not is_enabled(ctx):
        return

    if not (is_whitelisted(ctx, src) or is_whitelisted(ctx, dst)):
        abi.revert(error=TransactionsDisabled)

    if amount > transaction_limit(ctx):
        abi.revert(error=TransactionLimitExceeded)

    if balance_of(ctx, dst) + amount > wallet_balance_limit(ctx):
        abi.revert(error=WalletBalanceLimitExceeded)


__all__ = [
    "ENABLED_KEY",
    "TX_LIMIT_KEY",
    "WALLET_LIMIT_KEY",
    "WL_PREFIX",
    "key_whitelist",
    "is_enabled",
    "is_whitelisted",
    "transaction_limit",
    "wallet_balance_limit",
    "init_guard",
    "set_enabled",
    "add_to_whitelist",
    "remove_from_whitelist",
    "set_transaction_limit",
    "set_wallet_balance_limit",
    "check_transfer",
]
