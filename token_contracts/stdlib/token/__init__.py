# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.token
============================

Deterministic helpers and constants for fungible token contracts.
This package **does not** perform storage or event emission by itself;
it only provides conventions, prefixes, and validation shared by token
implementations (see `token_contracts.stdlib.token.fungible`).

Conventions
-----------
Storage keys (prefixed bytes):
  - balances:   BAL_PREFIX || <addr>
  - allowances: ALLOW_PREFIX || <owner> || b"|" || <spender>
  - metadata:   tok:meta:{name,symbol,dec,total}
Addresses are raw `bytes`; the null address is 20 zero bytes
(`ZERO_ADDRESS`). Any all-zero address counts as null.

Events (names as bytes):
  - b"Transfer" with payload { "from": bytes, "to": bytes, "value": int }
  - b"Approval" with payload { "owner": bytes, "spender": bytes, "value": int }

Symbols/Names:
  - Stored exactly as deployed (UTF-8 bytes): no case folding, no length
    limits. Only values that are not text are rejected.

Numeric domain:
  - Amounts fit U256 (0 <= n <= 2**256-1). Arithmetic goes through
    `token_contracts.stdlib.math.safe_uint` (checked, never wraps).
"""

from __future__ import annotations

from typing import Final, Union

from ledger_vm.runtime import abi

from ..errors import ArithmeticRevert, InvalidAddress, InvalidMetadata
from ..math.safe_uint import is_u256

# -----------------------------------------------------------------------------
# Public constants: storage prefixes, event names, errors
# -----------------------------------------------------------------------------

BAL_PREFIX: Final[bytes] = b"tok:bal:"
ALLOW_PREFIX: Final[bytes] = b"tok:allow:"

K_NAME: Final[bytes] = b"tok:meta:name"  # bytes (UTF-8)
K_SYMBOL: Final[bytes] = b"tok:meta:symbol"  # bytes (UTF-8)
K_DECIMALS: Final[bytes] = b"tok:meta:dec"  # u256
K_TOTAL: Final[bytes] = b"tok:meta:total"  # u256

ZERO_ADDRESS: Final[bytes] = b"\x00" * 20

EVT_TRANSFER: Final[bytes] = b"Transfer"
EVT_APPROVAL: Final[bytes] = b"Approval"

# Stable error tags (short, comparable, log-friendly)
ERR_BAD_ADDR: Final[bytes] = b"TOKEN:BAD_ADDR"
ERR_BAD_AMOUNT: Final[bytes] = b"TOKEN:BAD_AMOUNT"
ERR_BAD_METADATA: Final[bytes] = b"TOKEN:BAD_METADATA"

# Revert reasons surfaced to callers verbatim
REASON_TRANSFER_FROM_ZERO: Final[str] = "ERC20: transfer from the zero address"
REASON_TRANSFER_TO_ZERO: Final[str] = "ERC20: transfer to the zero address"
REASON_APPROVE_FROM_ZERO: Final[str] = "ERC20: approve from the zero address"
REASON_APPROVE_TO_ZERO: Final[str] = "ERC20: approve to the zero address"
REASON_BURN_FROM_ZERO: Final[str] = "ERC20: burn from the zero address"
REASON_TRANSFER_EXCEEDS: Final[str] = "ERC20: transfer amount exceeds balance"
REASON_BURN_EXCEEDS: Final[str] = "ERC20: burn amount exceeds balance"
REASON_INSUFFICIENT_ALLOWANCE: Final[str] = "ERC20: insufficient allowance"
REASON_DECREASED_BELOW_ZERO: Final[str] = "ERC20: decreased allowance below zero"


# -----------------------------------------------------------------------------
# Key derivation helpers (no storage I/O here)
# -----------------------------------------------------------------------------


def key_balance(addr: bytes) -> bytes:
    """
    Derive the canonical balance key for an address.
    """
    require_address(addr)
    return BAL_PREFIX + bytes(addr)


def key_allow(owner: bytes, spender: bytes) -> bytes:
    """
    Derive the canonical allowance key for (owner, spender).
    """
    require_address(owner)
    require_address(spender)
    return ALLOW_PREFIX + bytes(owner) + b"|" + bytes(spender)


# -----------------------------------------------------------------------------
# Validation helpers (deterministic, float-free)
# -----------------------------------------------------------------------------


def is_zero_address(addr: bytes) -> bool:
    return not any(addr)


def require_address(addr: bytes) -> None:
    """
    Ensure `addr` is non-empty bytes. Width is not fixed here; the null check
    is a separate concern (`is_zero_address`).
    """
    if not isinstance(addr, (bytes, bytearray)) or len(addr) == 0:
        abi.revert(ERR_BAD_ADDR, error=InvalidAddress)


def require_amount(n: int) -> None:
    """
    Ensure `n` is an integer amount in [0, 2**256-1].
    """
    if not is_u256(n):
        abi.revert(ERR_BAD_AMOUNT, error=ArithmeticRevert)


def as_metadata(value: Union[str, bytes]) -> bytes:
    """
    Encode a name or symbol for storage. Text is kept verbatim (UTF-8);
    anything that is not `str` or UTF-8 `bytes` reverts with InvalidMetadata.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        try:
            bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            abi.revert(ERR_BAD_METADATA, error=InvalidMetadata)
        return bytes(value)
    abi.revert(ERR_BAD_METADATA, error=InvalidMetadata)


# -----------------------------------------------------------------------------
# Public exports
# -----------------------------------------------------------------------------

__all__ = [
    # prefixes & keys
    "BAL_PREFIX",
    "ALLOW_PREFIX",
    "K_NAME",
    "K_SYMBOL",
    "K_DECIMALS",
    "K_TOTAL",
    "ZERO_ADDRESS",
    # events
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    # errors
    "ERR_BAD_ADDR",
    "ERR_BAD_AMOUNT",
    "ERR_BAD_METADATA",
    "REASON_TRANSFER_FROM_ZERO",
    "REASON_TRANSFER_TO_ZERO",
    "REASON_APPROVE_FROM_ZERO",
    "REASON_APPROVE_TO_ZERO",
    "REASON_BURN_FROM_ZERO",
    "REASON_TRANSFER_EXCEEDS",
    "REASON_BURN_EXCEEDS",
    "REASON_INSUFFICIENT_ALLOWANCE",
    "REASON_DECREASED_BELOW_ZERO",
    # key derivation
    "key_balance",
    "key_allow",
    # validators
    "is_zero_address",
    "require_address",
    "require_amount",
    "as_metadata",
]
