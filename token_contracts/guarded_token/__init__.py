# -*- coding: utf-8 -*-
"""
token_contracts.guarded_token: the composed guarded token.

Deploy it on an engine:

    from ledger_vm import Engine
    from token_contracts.guarded_token import contract

    token = Engine.deploy(contract, address=addr, args=(
        "Bair", "BAIR", 1_000_000, 18, owner, 50, 500, True,
    ))
    token.call("transfer", owner, alice, 10)
"""

from . import contract

LOGIC_REF = "token_contracts.guarded_token.contract"

__all__ = ["contract", "LOGIC_REF"]
