# -*- coding: utf-8 -*-
"""
Guarded Token: upgradeable ERC-20 ledger with an anti-bot transfer guard
------------------------------------------------------------------------

Every function takes the engine's `CallContext` first; state-changing
functions take the explicit `caller` next.

Views:
  - name() -> str, symbol() -> str, decimals() -> int
  - totalSupply() -> int
  - balanceOf(addr) -> int
  - allowance(owner, spender) -> int
  - owner() -> bytes
  - paused() -> bool
  - isWhiteListed(addr) -> bool
  - getTransactionLimit() -> int, getWalletBalanceLimit() -> int
  - getAntiBotProtectionStatus() -> bool
  - implementation() -> bytes, layoutVersion() -> int, getInitializedVersion() -> int
Ledger:
  - transfer(caller, to, amount) -> bool
  - approve(caller, spender, amount) -> bool
  - transferFrom(caller, src, dst, amount) -> bool
  - increaseAllowance(caller, spender, delta) / decreaseAllowance(caller, spender, delta) -> bool
  - burn(caller, amount) / burnFrom(caller, owner, amount) -> bool
Owner-only:
  - transferOwnership(caller, new_owner), renounceOwnership(caller)
  - pause(caller), unpause(caller)
  - toggleAntiBotProtection(caller, enabled)
  - addToWhiteList(caller, addresses), removeFromWhiteList(caller, addresses)
  - setTransactionLimit(caller, amount), setWalletBalanceLimit(caller, amount)
  - upgradeTo(caller, layout, implementation)
Setup:
  - initialize(name, symbol, total_supply, decimals, initial_owner,
               tx_limit, wallet_limit, anti_bot)   (exactly once)

Transfers and transferFrom pass the pause switch, then the anti-bot guard,
then the balance check. Burns, approvals and administration bypass both.
"""
from __future__ import annotations

from typing import Iterable, Union

from ledger_vm.runtime.context import CallContext
from token_contracts.stdlib.access import ownable
from token_contracts.stdlib.control import pausable
from token_contracts.stdlib.guard import anti_bot
from token_contracts.stdlib.token import (ALLOW_PREFIX, BAL_PREFIX,
                                          K_DECIMALS, K_NAME, K_SYMBOL,
                                          K_TOTAL, fungible)
from token_contracts.stdlib.upgrade import (Field, StorageLayout,
                                            initializable, record_deployment,
                                            stored_layout, upgrade_to)
from token_contracts.stdlib.upgrade import implementation as _implementation

# ----------------------------
# Persisted state (append-only)
# ----------------------------

LAYOUT = StorageLayout(
    1,
    (
        Field("name", K_NAME, "bytes"),
        Field("symbol", K_SYMBOL, "bytes"),
        Field("decimals", K_DECIMALS, "u256"),
        Field("totalSupply", K_TOTAL, "u256"),
        Field("balances", BAL_PREFIX, "map:u256"),
        Field("allowances", ALLOW_PREFIX, "map:u256"),
        Field("owner", ownable.OWNER_KEY, "bytes"),
        Field("paused", pausable.PAUSED_KEY, "bool"),
        Field("antiBotEnabled", anti_bot.ENABLED_KEY, "bool"),
        Field("transactionLimit", anti_bot.TX_LIMIT_KEY, "u256"),
        Field("walletBalanceLimit", anti_bot.WALLET_LIMIT_KEY, "u256"),
        Field("whitelist", anti_bot.WL_PREFIX, "map:bool"),
        Field("initializedVersion", initializable.INIT_VERSION_KEY, "u256"),
    ),
)

# ----------------------------
# Setup
# ----------------------------


def initialize(
    ctx: CallContext,
    name: Union[str, bytes],
    symbol: Union[str, bytes],
    total_supply: int,
    decimals: int,
    initial_owner: bytes,
    tx_limit: int,
    wallet_limit: int,
    anti_bot_enabled: bool,
) -> None:
    initializable.initializer(ctx)
    fungible.init_metadata(ctx, name, symbol, decimals)
    ownable.init_owner(ctx, initial_owner)
    fungible.mint_initial(ctx, initial_owner, total_supply)
    pausable.set_paused(ctx, False)
    anti_bot.init_guard(
        ctx,
        enabled=anti_bot_enabled,
        tx_limit=tx_limit,
        wallet_limit=wallet_limit,
        whitelist=(ctx.address, initial_owner),
    )
    record_deployment(ctx, LAYOUT, ctx.code_hash)


def _before_token_transfer(ctx: CallContext, src: bytes, dst: bytes, amount: int) -> None:
    pausable.require_not_paused(ctx)
    anti_bot.check_transfer(ctx, src, dst, amount)


# ----------------------------
# Views
# ----------------------------


def name(ctx: CallContext) -> str:
    return fungible.name(ctx)


def symbol(ctx: CallContext) -> str:
    return fungible.symbol(ctx)


def decimals(ctx: CallContext) -> int:
    return fungible.decimals(ctx)


def totalSupply(ctx: CallContext) -> int:
    return fungible.total_supply(ctx)


def balanceOf(ctx: CallContext, addr: bytes) -> int:
    return fungible.balance_of(ctx, addr)


def allowance(ctx: CallContext, owner: bytes, spender: bytes) -> int:
    return fungible.allowance(ctx, owner, spender)


def owner(ctx: CallContext) -> bytes:
    return ownable.get_owner(ctx)


def paused(ctx: CallContext) -> bool:
    return pausable.is_paused(ctx)


def isWhiteListed(ctx: CallContext, addr: bytes) -> bool:
    return anti_bot.is_whitelisted(ctx, addr)


def getTransactionLimit(ctx: CallContext) -> int:
    return anti_bot.transaction_limit(ctx)


def getWalletBalanceLimit(ctx: CallContext) -> int:
    return anti_bot.wallet_balance_limit(ctx)


def getAntiBotProtectionStatus(ctx: CallContext) -> bool:
    return anti_bot.is_enabled(ctx)


def implementation(ctx: CallContext) -> bytes:
    return _implementation(ctx)


def layoutVersion(ctx: CallContext) -> int:
    layout = stored_layout(ctx)
    return layout.version if layout is not None else 0


def getInitializedVersion(ctx: CallContext) -> int:
    return initializable.get_initialized_version(ctx)


# ----------------------------
# Ledger
# ----------------------------


def transfer(ctx: CallContext, caller: bytes, to: bytes, amount: int) -> bool:
    return fungible.transfer(ctx, caller, to, amount, hook=_before_token_transfer)


def approve(ctx: CallContext, caller: bytes, spender: bytes, amount: int) -> bool:
    return fungible.approve(ctx, caller, spender, amount)


def transferFrom(ctx: CallContext, caller: bytes, src: bytes, dst: bytes, amount: int) -> bool:
    return fungible.transfer_from(ctx, caller, src, dst, amount, hook=_before_token_transfer)


def increaseAllowance(ctx: CallContext, caller: bytes, spender: bytes, delta: int) -> bool:
    return fungible.increase_allowance(ctx, caller, spender, delta)


def decreaseAllowance(ctx: CallContext, caller: bytes, spender: bytes, delta: int) -> bool:
    return fungible.decrease_allowance(ctx, caller, spender, delta)


def burn(ctx: CallContext, caller: bytes, amount: int) -> bool:
    return fungible.burn(ctx, caller, amount)


def burnFrom(ctx: CallContext, caller: bytes, owner: bytes, amount: int) -> bool:
    return fungible.burn_from(ctx, caller, owner, amount)


# ----------------------------
# Ownership & pause
# ----------------------------


def transferOwnership(ctx: CallContext, caller: bytes, new_owner: bytes) -> None:
    ownable.transfer_ownership(ctx, caller, new_owner)


def renounceOwnership(ctx: CallContext, caller: bytes) -> None:
    ownable.renounce_ownership(ctx, caller)


def pause(ctx: CallContext, caller: bytes) -> None:
    pausable.pause(ctx, caller)


def unpause(ctx: CallContext, caller: bytes) -> None:
    pausable.unpause(ctx, caller)


# ----------------------------
# Anti-bot administration
# ----------------------------


def toggleAntiBotProtection(ctx: CallContext, caller: bytes, enabled: bool) -> None:
    anti_bot.set_enabled(ctx, caller, enabled)


def addToWhiteList(ctx: CallContext, caller: bytes, addresses: Iterable[bytes]) -> None:
    anti_bot.add_to_whitelist(ctx, caller, addresses)


def removeFromWhiteList(ctx: CallContext, caller: bytes, addresses: Iterable[bytes]) -> None:
    anti_bot.remove_from_whitelist(ctx, caller, addresses)


def setTransactionLimit(ctx: CallContext, caller: bytes, amount: int) -> None:
    anti_bot.set_transaction_limit(ctx, caller, amount)


def setWalletBalanceLimit(ctx: CallContext, caller: bytes, amount: int) -> None:
    anti_bot.set_wallet_balance_limit(ctx, caller, amount)


# ----------------------------
# Upgrade
# ----------------------------


def upgradeTo(ctx: CallContext, caller: bytes, new_layout: StorageLayout, new_impl: bytes) -> None:
    ownable.require_owner(ctx, caller)
    upgrade_to(ctx, new_layout, new_impl)


__all__ = [
    "initialize",
    # views
    "name",
    "symbol",
    "decimals",
    "totalSupply",
    "balanceOf",
    "allowance",
    "owner",
    "paused",
    "isWhiteListed",
    "getTransactionLimit",
    "getWalletBalanceLimit",
    "getAntiBotProtectionStatus",
    "implementation",
    "layoutVersion",
    "getInitializedVersion",
    # ledger
    "transfer",
    "approve",
    "transferFrom",
    "increaseAllowance",
    "decreaseAllowance",
    "burn",
    "burnFrom",
    # ownership & pause
    "transferOwnership",
    "renounceOwnership",
    "pause",
    "unpause",
    # anti-bot
    "toggleAntiBotProtection",
    "addToWhiteList",
    "removeFromWhiteList",
    "setTransactionLimit",
    "setWalletBalanceLimit",
    # upgrade
    "upgradeTo",
]
