# -*- coding: utf-8 -*-
"""
token_contracts.stdlib.math.safe_uint
=====================================

Checked unsigned-integer helpers for token ledgers.

- Integer-only, U256 domain (0 <= n <= 2**256-1).
- Every helper reverts with `ArithmeticRevert` instead of wrapping or
  clamping, so a ledger can never observe a negative or oversized amount.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime import abi

from ..errors import ArithmeticRevert

U256_MAX: Final[int] = (1 << 256) - 1

# Canonical error tags (short, stable)
ERR_OOB: Final[bytes] = b"UINT:OOB"  # input/result outside [0, U256_MAX]
ERR_OVER: Final[bytes] = b"UINT:OVERFLOW"
ERR_UNDER: Final[bytes] = b"UINT:UNDERFLOW"


def is_u256(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= U256_MAX


def require_u256(*xs: int) -> None:
    """Revert if any argument is not an int in [0, U256_MAX]."""
    for x in xs:
        if not is_u256(x):
            abi.revert(ERR_OOB, error=ArithmeticRevert)


def u256_add(x: int, y: int) -> int:
    """Checked add: revert on overflow."""
    require_u256(x, y)
    z = x + y
    if z > U256_MAX:
        abi.revert(ERR_OVER, error=ArithmeticRevert)
    return z


def u256_sub(x: int, y: int) -> int:
    """Checked subtract: revert on underflow."""
    require_u256(x, y)
    if y > x:
        abi.revert(ERR_UNDER, error=ArithmeticRevert)
    return x - y


__all__ = [
    "U256_MAX",
    "ERR_OOB",
    "ERR_OVER",
    "ERR_UNDER",
    "is_u256",
    "require_u256",
    "u256_add",
    "u256_sub",
]
