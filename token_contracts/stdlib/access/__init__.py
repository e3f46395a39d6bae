# -*- coding: utf-8 -*-
"""token_contracts.stdlib.access: single-owner access control."""

from .ownable import (OWNER_KEY, get_owner, init_owner, renounce_ownership,
                      require_owner, transfer_ownership)

__all__ = [
    "OWNER_KEY",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
    "renounce_ownership",
]
