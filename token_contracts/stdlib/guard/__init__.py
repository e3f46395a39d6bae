# -*- coding: utf-8 -*-
"""token_contracts.stdlib.guard: anti-bot whitelist and transfer ceilings."""

from .anti_bot import (add_to_whitelist, check_transfer, init_guard,
                       is_enabled, is_whitelisted, remove_from_whitelist,
                       set_enabled, set_transaction_limit,
                       set_wallet_balance_limit, transaction_limit,
                       wallet_balance_limit)

__all__ = [
    "add_to_whitelist",
    "check_transfer",
    "init_guard",
    "is_enabled",
    "is_whitelisted",
    "remove_from_whitelist",
    "set_enabled",
    "set_transaction_limit",
    "set_wallet_balance_limit",
    "transaction_limit",
    "wallet_balance_limit",
]
