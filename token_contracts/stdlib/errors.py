# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.errors
=============================

Revert taxonomy for token contracts. Each failure cause is its own `Revert`
subclass with a stable `code`, and a default reason matching the strings
wallets and tooling already recognize for ERC20 / Ownable / Pausable tokens.

    try:
        engine.call("transfer", alice, bob, 10)
    except TransactionsDisabled as e:
        assert e.reason == "Transactions disabled for these accounts."

Catch `Revert` to handle every contract-level rejection at once.
"""

from __future__ import annotations

from ledger_vm.errors import Revert


class Unauthorized(Revert):
    code = "Unauthorized"
    default_reason = "Ownable: caller is not the owner"


class InvalidAddress(Revert):
    code = "InvalidAddress"
    default_reason = "ERC20: invalid address"


class InvalidRecipient(InvalidAddress):
    code = "InvalidRecipient"
    default_reason = "ERC20: transfer to the zero address"


class InsufficientBalance(Revert):
    code = "InsufficientBalance"
    default_reason = "ERC20: transfer amount exceeds balance"


class InsufficientAllowance(Revert):
    code = "InsufficientAllowance"
    default_reason = "ERC20: insufficient allowance"


class OperationPaused(Revert):
    code = "OperationPaused"
    default_reason = "Pausable: paused"


class TransactionsDisabled(Revert):
    code = "TransactionsDisabled"
    default_reason = "Transactions disabled for these accounts."


class TransactionLimitExceeded(Revert):
    code = "TransactionLimitExceeded"
    default_reason = "Transaction limit exceeded : Please send lesser amounts."


class WalletBalanceLimitExceeded(Revert):
    code = "WalletBalanceLimitExceeded"
    default_reason = "Exceeding maximum wallet balance : Please send lesser amounts."


class ReinitializationBlocked(Revert):
    code = "ReinitializationBlocked"
    default_reason = "Initializable: contract is already initialized"


class ArithmeticRevert(Revert, ArithmeticError):
    """Checked u256 arithmetic left its domain."""

    code = "ArithmeticError"
    default_reason = "UINT:OVERFLOW"


class InvalidMetadata(Revert):
    code = "InvalidMetadata"
    default_reason = "TOKEN:BAD_METADATA"


class IncompatibleLayout(Revert):
    code = "IncompatibleLayout"
    default_reason = "UPGRADE: incompatible storage layout"


__all__ = [
    "Unauthorized",
    "InvalidAddress",
    "InvalidRecipient",
    "InsufficientBalance",
    "InsufficientAllowance",
    "OperationPaused",
    "TransactionsDisabled",
    "TransactionLimitExceeded",
    "WalletBalanceLimitExceeded",
    "ReinitializationBlocked",
    "ArithmeticRevert",
    "InvalidMetadata",
    "IncompatibleLayout",
]
