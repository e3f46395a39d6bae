from __future__ import annotations

from typing import Any, Mapping, NoReturn, Optional, Type

from ledger_vm.errors import Revert


def revert(
    reason: Any = None,
    *,
    error: Type[Revert] = Revert,
    context: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    """
    Abort the current call. Every write staged by the call is discarded.

        abi.revert(b"TOKEN:BAD_AMOUNT")
        abi.revert(error=InsufficientBalance)
    """
    raise error(reason, context=context)


def require(
    condition: bool,
    reason: Any = None,
    *,
    error: Type[Revert] = Revert,
    context: Optional[Mapping[str, Any]] = None,
) -> None:
    """
    Assertion helper for contracts.

        abi.require(bal >= amount, error=InsufficientBalance)
        abi.require(n >= 0, b"counter: negative")
    """
    if condition:
        return
    raise error(reason, context=context)


__all__ = ["revert", "require"]
